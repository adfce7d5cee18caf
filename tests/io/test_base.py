from nitfkit.compliance import NITFError
from nitfkit.io.base import FormatError, UnsupportedVariantError, MetadataInconsistency, ParseDiagnostics

from tests import unittest


class TestErrors(unittest.TestCase):
    def test_hierarchy(self):
        self.assertTrue(issubclass(FormatError, NITFError))
        self.assertTrue(issubclass(UnsupportedVariantError, NITFError))

    def test_context(self):
        error = FormatError('Invalid code', field='SCOLOR', offset=240)
        self.assertIsNone(error.segment_kind)
        error.add_context('symbol', 2)
        self.assertEqual(error.segment_kind, 'symbol')
        self.assertEqual(error.segment_index, 2)
        # the innermost context is kept
        error.add_context('file header')
        self.assertEqual(error.segment_kind, 'symbol')
        message = str(error)
        self.assertIn('symbol 2', message)
        self.assertIn('field SCOLOR', message)
        self.assertIn('offset 240', message)

    def test_plain_message(self):
        self.assertEqual(str(FormatError('bad')), 'bad')


class TestDiagnostics(unittest.TestCase):
    def test_report(self):
        diagnostics = ParseDiagnostics()
        self.assertEqual(len(diagnostics), 0)
        with self.assertLogs('nitfkit.io.base', level='WARNING'):
            entry = diagnostics.report('TRE repeated', source='image extended subheader data', tag='BLOCKA')
        self.assertEqual(len(diagnostics), 1)
        self.assertIs(diagnostics[0], entry)
        self.assertEqual(entry.tag, 'BLOCKA')
        self.assertEqual(
            entry, MetadataInconsistency('TRE repeated', source='image extended subheader data', tag='BLOCKA'))
        self.assertEqual(diagnostics.as_tuple(), (entry, ))
        self.assertEqual(list(diagnostics), [entry, ])
