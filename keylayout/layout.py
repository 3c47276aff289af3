# Copyright (c) 2026 keylayout contributors
# 
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

import logging
from enum import IntEnum, unique
from collections import namedtuple
from types import MappingProxyType
from typing import Text, Dict, FrozenSet, List, Optional, Tuple, Iterable

logger = logging.getLogger (__name__)

# policy flag bits, as found in the default label vocabulary. Reverse
# lookups filter on these values, custom vocabularies must use the same bits.
POLICY_FLAG_WAKE = 0x00000001
POLICY_FLAG_VIRTUAL = 0x00000002
POLICY_FLAG_FUNCTION = 0x00000004
POLICY_FLAG_GESTURE = 0x00000008
POLICY_FLAG_FALLBACK_USAGE_MAPPING = 0x00000010

# caller convention for unmapped keys
KEYCODE_UNKNOWN = 0

@unique
class SensorType(IntEnum):
    ACCELEROMETER = 1
    MAGNETIC_FIELD = 2
    ORIENTATION = 3
    GYROSCOPE = 4
    LIGHT = 5
    PRESSURE = 6
    TEMPERATURE = 7
    PROXIMITY = 8
    GRAVITY = 9
    LINEAR_ACCELERATION = 10
    ROTATION_VECTOR = 11
    RELATIVE_HUMIDITY = 12
    AMBIENT_TEMPERATURE = 13
    MAGNETIC_FIELD_UNCALIBRATED = 14
    GAME_ROTATION_VECTOR = 15
    GYROSCOPE_UNCALIBRATED = 16
    SIGNIFICANT_MOTION = 17

# X, Y and Z data channels of a sensor
sensorDataIndex = {'X': 0, 'Y': 1, 'Z': 2}

@unique
class AxisMode(IntEnum):
    PLAIN = 0
    INVERT = 1
    SPLIT = 2

KeyEntry = namedtuple ('KeyEntry', ['keyCode', 'flags'])
LedEntry = namedtuple ('LedEntry', ['ledCode'])
SensorEntry = namedtuple ('SensorEntry', ['sensorType', 'dataIndex'])

class AxisEntry:
    """ Common base of the axis mappings, which differ by type, not just value """
    __slots__ = ()

    def __eq__ (self, other):
        if not isinstance (other, AxisEntry):
            return NotImplemented
        return type (self) is type (other) and tuple.__eq__ (self, other)

    def __ne__ (self, other):
        eq = self.__eq__ (other)
        return eq if eq is NotImplemented else not eq

    def __hash__ (self):
        return hash ((self.mode, tuple (self)))

class PlainAxis (AxisEntry, namedtuple ('PlainAxis', ['axis', 'flatOverride'], defaults=(None, ))):
    """ Raw axis value is reported as is """
    __slots__ = ()
    mode = AxisMode.PLAIN

class InvertAxis (AxisEntry, namedtuple ('InvertAxis', ['axis', 'flatOverride'], defaults=(None, ))):
    """ Raw axis value is negated """
    __slots__ = ()
    mode = AxisMode.INVERT

class SplitAxis (AxisEntry, namedtuple ('SplitAxis', ['low', 'high', 'splitValue', 'flatOverride'], defaults=(None, ))):
    """
    One raw axis drives two axes: values below splitValue go to low, values
    above it to high.
    """
    __slots__ = ()
    mode = AxisMode.SPLIT

    @property
    def axis (self):
        return self.low

    @property
    def highAxis (self):
        return self.high

class KeyLayout:
    """
    Immutable lookup tables of a single key layout file.

    Instances are created by the parser only and can be shared freely, since
    nothing modifies them after construction.
    """

    __slots__ = ('_keysByScanCode', '_keysByUsageCode', '_axes',
            '_ledsByScanCode', '_ledsByUsageCode', '_sensors',
            '_requiredKernelConfigs', '_filename')

    def __init__ (self, keysByScanCode: Dict[int, KeyEntry] = None,
            keysByUsageCode: Dict[int, KeyEntry] = None,
            axes: Dict[int, AxisEntry] = None,
            ledsByScanCode: Dict[int, LedEntry] = None,
            ledsByUsageCode: Dict[int, LedEntry] = None,
            sensors: Dict[int, SensorEntry] = None,
            requiredKernelConfigs: Iterable[Text] = None,
            filename: Optional[Text] = None):
        # private copies, the caller’s dicts may change afterwards
        def freeze (d):
            return MappingProxyType (dict (d or {}))
        assign = object.__setattr__
        assign (self, '_keysByScanCode', freeze (keysByScanCode))
        assign (self, '_keysByUsageCode', freeze (keysByUsageCode))
        assign (self, '_axes', freeze (axes))
        assign (self, '_ledsByScanCode', freeze (ledsByScanCode))
        assign (self, '_ledsByUsageCode', freeze (ledsByUsageCode))
        assign (self, '_sensors', freeze (sensors))
        assign (self, '_requiredKernelConfigs', frozenset (requiredKernelConfigs or ()))
        assign (self, '_filename', filename)

    def __setattr__ (self, name, value):
        raise AttributeError (f'{self.__class__.__name__} is immutable')

    def __delattr__ (self, name):
        raise AttributeError (f'{self.__class__.__name__} is immutable')

    def __repr__ (self): # pragma: no cover
        return (f'<KeyLayout {self._filename}: {len (self._keysByScanCode)} scan codes, '
                f'{len (self._keysByUsageCode)} usages, {len (self._axes)} axes>')

    def __eq__ (self, other):
        if not isinstance (other, KeyLayout):
            return NotImplemented
        return self._keysByScanCode == other._keysByScanCode \
                and self._keysByUsageCode == other._keysByUsageCode \
                and self._axes == other._axes \
                and self._ledsByScanCode == other._ledsByScanCode \
                and self._ledsByUsageCode == other._ledsByUsageCode \
                and self._sensors == other._sensors \
                and self._requiredKernelConfigs == other._requiredKernelConfigs

    __hash__ = None

    def withFilename (self, filename: Text) -> 'KeyLayout':
        """ Copy of this layout recording the file it was loaded from """
        return self.__class__ (self._keysByScanCode, self._keysByUsageCode,
                self._axes, self._ledsByScanCode, self._ledsByUsageCode,
                self._sensors, self._requiredKernelConfigs, filename)

    @property
    def filename (self) -> Optional[Text]:
        return self._filename

    @property
    def keysByScanCode (self):
        return self._keysByScanCode

    @property
    def keysByUsageCode (self):
        return self._keysByUsageCode

    @property
    def axes (self):
        return self._axes

    @property
    def ledsByScanCode (self):
        return self._ledsByScanCode

    @property
    def ledsByUsageCode (self):
        return self._ledsByUsageCode

    @property
    def sensors (self):
        return self._sensors

    @property
    def requiredKernelConfigs (self) -> FrozenSet[Text]:
        return self._requiredKernelConfigs

    def getKey (self, scanCode: int, usageCode: int) -> Optional[KeyEntry]:
        """ Usage codes take precedence over scan codes, 0 means no code """
        if usageCode:
            key = self._keysByUsageCode.get (usageCode)
            if key is not None:
                return key
        if scanCode:
            return self._keysByScanCode.get (scanCode)
        return None

    def mapKey (self, scanCode: int, usageCode: int = 0) -> KeyEntry:
        """
        Look up the key for a scan code/usage code pair. Raises KeyError if
        neither is mapped, callers usually fall back to
        (KEYCODE_UNKNOWN, 0) then.
        """
        key = self.getKey (scanCode, usageCode)
        if key is None:
            logger.debug (f'mapKey: scanCode={scanCode}, usageCode={usageCode:#010x} ~ Failed.')
            raise KeyError ((scanCode, usageCode))
        logger.debug (f'mapKey: scanCode={scanCode}, usageCode={usageCode:#010x} ~ '
                f'Result keyCode={key.keyCode}, flags={key.flags:#010x}.')
        return key

    def mapAxis (self, scanCode: int) -> Optional[AxisEntry]:
        """ Axis entry for scanCode or None """
        axis = self._axes.get (scanCode)
        if axis is None:
            logger.debug (f'mapAxis: scanCode={scanCode} ~ Failed.')
        else:
            logger.debug (f'mapAxis: scanCode={scanCode} ~ Result {axis}.')
        return axis

    def mapSensor (self, absCode: int) -> Tuple[SensorType, int]:
        try:
            sensor = self._sensors[absCode]
        except KeyError:
            logger.debug (f'mapSensor: absCode={absCode} ~ Failed.')
            raise KeyError (f"Can't find abs code {absCode}.") from None
        logger.debug (f'mapSensor: absCode={absCode}, sensorType={sensor.sensorType.name}, '
                f'sensorDataIndex={sensor.dataIndex:#x}.')
        return (sensor.sensorType, sensor.dataIndex)

    def findScanCodesForKey (self, keyCode: int) -> List[int]:
        """ Scan codes of keyCode, except FUNCTION entries (fixed bit POLICY_FLAG_FUNCTION) """
        # function row keys are reached through a modifier, not directly
        return [scanCode for scanCode, key in self._keysByScanCode.items ()
                if key.keyCode == keyCode and not key.flags & POLICY_FLAG_FUNCTION]

    def findUsageCodesForKey (self, keyCode: int) -> List[int]:
        """
        Usage codes of keyCode, except entries flagged with the fixed bit
        POLICY_FLAG_FALLBACK_USAGE_MAPPING
        """
        return [usageCode for usageCode, key in self._keysByUsageCode.items ()
                if key.keyCode == keyCode and not key.flags & POLICY_FLAG_FALLBACK_USAGE_MAPPING]

    def findScanCodeForLed (self, ledCode: int) -> Optional[int]:
        for scanCode, led in self._ledsByScanCode.items ():
            if led.ledCode == ledCode:
                logger.debug (f'findScanCodeForLed: ledCode={ledCode}, scanCode={scanCode}.')
                return scanCode
        logger.debug (f'findScanCodeForLed: ledCode={ledCode} ~ Not found.')
        return None

    def findUsageCodeForLed (self, ledCode: int) -> Optional[int]:
        for usageCode, led in self._ledsByUsageCode.items ():
            if led.ledCode == ledCode:
                logger.debug (f'findUsageCodeForLed: ledCode={ledCode}, usage={usageCode:#x}.')
                return usageCode
        logger.debug (f'findUsageCodeForLed: ledCode={ledCode} ~ Not found.')
        return None
