import pytest

import nitfkit.io
from nitfkit.io.flow import NITFSegmentsFlow, open_nitf
from nitfkit.io.nitf import parse_nitf
from nitfkit.io.parse_strategy import HeaderOnlyParseStrategy

from tests import unittest, build_nitf, graphics_subheader, text_subheader, des_subheader, res_subheader, \
    symbol_subheader, label_subheader, text_subheader0
from tests.io.test_nitf import _file_21 as file_with_images


def _file_21():
    value, _ = build_nitf({
        'graphics': [(graphics_subheader('GRA01'), b'first'), (graphics_subheader('GRA02'), b'second')],
        'text': [(text_subheader('TXT01'), b'some text'), ],
        'des': [(des_subheader('TEST_DES'), b'des'), ],
        'res': [(res_subheader('TEST_RES'), b'res'), ]})
    return value


class TestSegmentsFlow(unittest.TestCase):
    def test_chaining(self):
        titles = []
        graphics = []
        texts = []
        des = []
        res = []
        flow = open_nitf(_file_21())
        out = flow \
            .file_header(lambda header: titles.append(header.FTITLE)) \
            .for_each_image(lambda header, source: self.fail('there are no images')) \
            .for_each_graphic(lambda header, source: graphics.append((header.identifier, source.read()))) \
            .for_each_text(lambda header, source: texts.append(source.read())) \
            .for_each_data_segment(lambda header: des.append(header.identifier)) \
            .for_each_reserved_segment(lambda header: res.append(header.identifier))
        self.assertIs(out, flow)
        self.assertEqual(titles, ['synthetic test file'])
        self.assertEqual(graphics, [('GRA01', b'first'), ('GRA02', b'second')])
        self.assertEqual(texts, [b'some text'])
        self.assertEqual(des, ['TEST_DES'])
        self.assertEqual(res, ['TEST_RES'])
        self.assertEqual(flow.diagnostics, ())

    def test_repeated_traversal(self):
        flow = open_nitf(_file_21())
        first = []
        second = []
        flow.for_each_graphic(lambda header, source: first.append(source.read()))
        flow.for_each_graphic(lambda header, source: second.append(source.read()))
        self.assertEqual(first, second)
        self.assertEqual(first, [b'first', b'second'])

    def test_every_traversal_repeatable(self):
        value, _ = file_with_images()
        flow = open_nitf(value)

        def collect(method, with_data=True):
            out = []
            if with_data:
                method(lambda header, source: out.append((header, None if source is None else source.read())))
            else:
                method(lambda header: out.append((header, None)))
            return out

        traversals = [
            (flow.for_each_image, True), (flow.for_each_graphic, True),
            (flow.for_each_text, True), (flow.for_each_data_segment, False),
            (flow.for_each_reserved_segment, False), (flow.file_header, False)]
        for method, with_data in traversals:
            first = collect(method, with_data)
            second = collect(method, with_data)
            self.assertEqual(len(first), len(second))
            for (first_header, first_data), (second_header, second_data) in zip(first, second):
                self.assertIs(first_header, second_header)
                self.assertEqual(first_data, second_data)

        images = collect(flow.for_each_image)
        self.assertEqual([header.identifier for header, _ in images], ['IMG01', 'IMG02'])
        self.assertEqual([data for _, data in images], [bytes(range(16)), bytes(range(16))[::-1]])
        des = collect(flow.for_each_data_segment, False)
        self.assertEqual([header.identifier for header, _ in des], ['TEST_DES'])

    def test_header_only(self):
        sources = []
        open_nitf(_file_21(), strategy=HeaderOnlyParseStrategy()) \
            .for_each_text(lambda header, source: sources.append(source))
        self.assertEqual(sources, [None])

    def test_version_20(self):
        value, _ = build_nitf({
            'symbol': [(symbol_subheader(extended=b'00000'), b'symbol'), ],
            'label': [(label_subheader('LAB01'), b'label'), (label_subheader('LAB02'), b'other')],
            'text': [(text_subheader0('TXT01'), b'text'), ]}, version='02.00')
        symbols = []
        labels = []
        nitfkit.io.open(value) \
            .for_each_symbol(lambda header, source: symbols.append(source.read())) \
            .for_each_label(lambda header, source: labels.append(header.identifier))
        self.assertEqual(symbols, [b'symbol'])
        self.assertEqual(labels, ['LAB01', 'LAB02'])


def test_flow_requires_result():
    with pytest.raises(TypeError):
        NITFSegmentsFlow('not a result')


def test_flow_result():
    result = parse_nitf(_file_21())
    flow = NITFSegmentsFlow(result)
    assert flow.result is result
