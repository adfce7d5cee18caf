"""
Descriptions for TRE field codes whose meaning depends on the reporting sensor.

A lookup table is an XML document of the form

.. code-block:: xml

    <sensorLookup tag="ACFTB" field="SCENE_SOURCE">
        <sensor id="JSE8CA">
            <code value="1">Manual</code>
        </sensor>
    </sensorLookup>

and the tables for the supported TRE fields are shipped as package data.
"""

__classification__ = "UNCLASSIFIED"

import logging
import pkgutil
from typing import Dict, Optional, Union
from xml.etree import ElementTree

logger = logging.getLogger(__name__)

_DATA_PACKAGE = 'nitfkit.io.nitf_elements.tres'
_LOOKUPS = {}  # type: Dict[str, SensorLookup]


class SensorLookup(object):
    """
    A table of field code descriptions, keyed by sensor identifier and code.
    """

    __slots__ = ('_name', '_table')

    def __init__(self, data: Union[None, bytes, str] = None, name: Optional[str] = None):
        """

        Parameters
        ----------
        data : None|bytes|str
            The XML document. `None`, or a document which can not be parsed,
            results in an empty table and a logged warning.
        name : None|str
            The name of the table, for logging.
        """

        self._name = name
        self._table = {}  # type: Dict[str, Dict[str, str]]
        if data is None:
            logger.warning('No sensor lookup data provided for {}'.format(name))
            return
        try:
            root = ElementTree.fromstring(data)
        except ElementTree.ParseError as e:
            logger.warning('Problem parsing sensor lookup XML for {}. {}'.format(name, e))
            return
        self._populate(root)

    def _populate(self, root):
        for sensor_node in root.findall('sensor'):
            sensor_id = sensor_node.attrib.get('id', None)
            if sensor_id is None:
                logger.warning(
                    'Skipping sensor entry without an id in sensor lookup {}'.format(self._name))
                continue
            codes = self._table.setdefault(sensor_id.strip(), {})
            for code_node in sensor_node.findall('code'):
                value = code_node.attrib.get('value', None)
                if value is None:
                    logger.warning(
                        'Skipping code entry without a value for sensor {} '
                        'in sensor lookup {}'.format(sensor_id, self._name))
                    continue
                codes[value.strip()] = (code_node.text or '').strip()

    @property
    def name(self):
        """
        None|str: The name of the table.
        """

        return self._name

    @property
    def sensors(self):
        """
        Tuple[str, ...]: The sensor identifiers with entries in this table.
        """

        return tuple(self._table.keys())

    def lookup_description(self, sensor_id: str, code: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get the description of the given code, as reported by the given sensor.

        Parameters
        ----------
        sensor_id : str
        code : str
        default : None|str
            Returned when the sensor or code is not in the table.

        Returns
        -------
        None|str
        """

        codes = self._table.get(sensor_id.strip(), None)
        if codes is None:
            return default
        return codes.get(code.strip(), default)

    @classmethod
    def from_package_data(cls, resource: str, package: str = _DATA_PACKAGE):
        """
        Load a lookup table shipped as package data.

        Parameters
        ----------
        resource : str
            The resource path, relative to the package directory.
        package : str

        Returns
        -------
        SensorLookup
        """

        try:
            data = pkgutil.get_data(package, resource)
        except (OSError, ImportError) as e:
            logger.warning('Problem reading sensor lookup resource {} from {}. {}'.format(resource, package, e))
            data = None
        return cls(data, name=resource)


def get_sensor_lookup(tag: str, field: str) -> SensorLookup:
    """
    Get the shipped lookup table for the given TRE field. Tables are read once,
    and shared.

    Parameters
    ----------
    tag : str
        The TRE tag, like `ACFTB`.
    field : str
        The field name, like `SCENE_SOURCE`.

    Returns
    -------
    SensorLookup
    """

    resource = 'data/{}_{}_sensor.xml'.format(tag, field)
    the_lookup = _LOOKUPS.get(resource, None)
    if the_lookup is None:
        the_lookup = SensorLookup.from_package_data(resource)
        _LOOKUPS[resource] = the_lookup
    return the_lookup
