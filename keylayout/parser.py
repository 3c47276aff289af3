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

"""
Key layout file parser.

A key layout file maps kernel input codes to platform identifiers, one
directive per line::

    # comment
    key 30 A
    key usage 0x00070004 A WAKE
    axis 0x11 split 75 X Y flat 4096
    led 0x00 NUM_LOCK
    sensor 0x00 ACCELEROMETER X
    requires_kernel_config CONFIG_HID_PLAYSTATION
"""

import logging
from typing import Text, Optional, Dict, Callable

from .tokenizer import Tokenizer, WHITESPACE
from .errors import ParseError, DuplicateEntry, UnknownLabel
from .layout import KeyLayout, KeyEntry, LedEntry, SensorEntry, SensorType, AxisEntry, \
        PlainAxis, InvertAxis, SplitAxis, sensorDataIndex

logger = logging.getLogger (__name__)

LONG_MIN = -2**63
LONG_MAX = 2**63-1

_digits = '0123456789abcdefghijklmnopqrstuvwxyz'

def parseInt (s: Text) -> Optional[int]:
    """
    Parse an integer like C’s strtol (s, &end, 0) followed by a conversion to
    a 32 bit int: optional sign, 0x prefix for hex, leading 0 for octal.
    Trailing characters after a valid number are ignored. Returns None if
    there is no number at all or it does not fit into a long.
    """
    token = s
    s = s.lstrip (' \t\n\v\f\r')
    negative = False
    if s[:1] in ('+', '-'):
        negative = s[0] == '-'
        s = s[1:]

    if s[:2] in ('0x', '0X') and s[2:3] and s[2].lower () in _digits[:16]:
        base = 16
        s = s[2:]
    elif s[:1] == '0':
        base = 8
    else:
        base = 10

    value = 0
    n = 0
    for c in s:
        d = _digits.find (c.lower ())
        if d == -1 or d >= base:
            break
        value = value*base + d
        n += 1
    if n == 0:
        logger.error (f'Could not parse {token}')
        return None

    if negative:
        value = -value
    if not LONG_MIN <= value <= LONG_MAX:
        logger.error (f'Out of bounds: {token}')
        return None
    # narrow to int32, wrapping around
    value &= 0xffffffff
    if value >= 2**31:
        value -= 2**32
    return value

def parseSensorType (token: Text) -> Optional[SensorType]:
    try:
        return SensorType[token]
    except KeyError:
        return None

class Parser:
    """
    Single pass parser, turns the token stream of a Tokenizer into a
    KeyLayout. The first error raises a ParseError, there is no recovery.

    labels resolves key code, key flag, axis and LED labels, see
    labels.LabelResolver.
    """

    __slots__ = ('tokenizer', 'labels', 'keysByScanCode', 'keysByUsageCode',
            'axes', 'ledsByScanCode', 'ledsByUsageCode', 'sensors',
            'requiredKernelConfigs', 'keywords')

    def __init__ (self, tokenizer: Tokenizer, labels):
        self.tokenizer = tokenizer
        self.labels = labels

        self.keysByScanCode : Dict[int, KeyEntry] = dict ()
        self.keysByUsageCode : Dict[int, KeyEntry] = dict ()
        self.axes : Dict[int, AxisEntry] = dict ()
        self.ledsByScanCode : Dict[int, LedEntry] = dict ()
        self.ledsByUsageCode : Dict[int, LedEntry] = dict ()
        self.sensors : Dict[int, SensorEntry] = dict ()
        self.requiredKernelConfigs = set ()

        self.keywords : Dict[Text, Callable[[], None]] = {
            'key': self.parseKey,
            'axis': self.parseAxis,
            'led': self.parseLed,
            'sensor': self.parseSensor,
            'requires_kernel_config': self.parseRequiredKernelConfig,
            }

    def error (self, message, cls=ParseError):
        filename, line = self.tokenizer.location ()
        logger.error (f'{filename}:{line}: {message}')
        return cls (filename, line, message)

    def unknownLabel (self, kind, message, token):
        suggest = getattr (self.labels, 'suggest', None)
        if suggest is not None and token:
            close = suggest (kind, token)
            if close:
                message += f' Did you mean {", ".join (close)}?'
        return self.error (message, UnknownLabel)

    def atEndOfDirective (self) -> bool:
        t = self.tokenizer
        return t.isEol () or t.peekChar () == '#'

    def nextToken (self) -> Text:
        """ Skip whitespace and read the next token """
        t = self.tokenizer
        t.skipDelimiters (WHITESPACE)
        return t.nextToken (WHITESPACE)

    def parse (self) -> KeyLayout:
        t = self.tokenizer
        while not t.isEof ():
            logger.debug (f'Parsing {":".join (map (str, t.location ()))}: '
                    f'{t.peekRemainderOfLine ()!r}.')

            t.skipDelimiters (WHITESPACE)
            if not self.atEndOfDirective ():
                keyword = t.nextToken (WHITESPACE)
                try:
                    directive = self.keywords[keyword]
                except KeyError:
                    raise self.error (f"Expected keyword, got '{keyword}'.") from None
                directive ()

                t.skipDelimiters (WHITESPACE)
                if not self.atEndOfDirective ():
                    raise self.error (f"Expected end of line or trailing comment, "
                            f"got '{t.peekRemainderOfLine ()}'.")

            t.nextLine ()

        return KeyLayout (keysByScanCode=self.keysByScanCode,
                keysByUsageCode=self.keysByUsageCode,
                axes=self.axes,
                ledsByScanCode=self.ledsByScanCode,
                ledsByUsageCode=self.ledsByUsageCode,
                sensors=self.sensors,
                requiredKernelConfigs=self.requiredKernelConfigs)

    def parseCode (self, what):
        """
        Parse [usage] <int> and return (usage?, code, token). what names the
        directive for error messages.
        """
        token = self.nextToken ()
        mapUsage = False
        if token == 'usage':
            mapUsage = True
            token = self.nextToken ()
        codeName = 'usage' if mapUsage else 'scan code'

        code = parseInt (token)
        if code is None:
            raise self.error (f"Expected {what} {codeName} number, got '{token}'.")
        return mapUsage, code, token

    def parseKey (self):
        mapUsage, code, codeToken = self.parseCode ('key')
        codeName = 'usage' if mapUsage else 'scan code'
        table = self.keysByUsageCode if mapUsage else self.keysByScanCode
        if code in table:
            raise self.error (f"Duplicate entry for key {codeName} '{codeToken}'.", DuplicateEntry)

        keyCodeToken = self.nextToken ()
        keyCode = self.labels.keyCode (keyCodeToken)
        if keyCode is None:
            raise self.unknownLabel ('keyCode',
                    f"Expected key code label, got '{keyCodeToken}'.", keyCodeToken)

        flags = 0
        while True:
            self.tokenizer.skipDelimiters (WHITESPACE)
            if self.atEndOfDirective ():
                break

            flagToken = self.tokenizer.nextToken (WHITESPACE)
            flag = self.labels.keyFlag (flagToken)
            if flag is None:
                raise self.unknownLabel ('keyFlag',
                        f"Expected key flag label, got '{flagToken}'.", flagToken)
            if flags & flag:
                raise self.error (f"Duplicate key flag '{flagToken}'.", DuplicateEntry)
            flags |= flag

        logger.debug (f'Parsed key {codeName}: code={code}, keyCode={keyCode}, flags={flags:#010x}.')
        table[code] = KeyEntry (keyCode=keyCode, flags=flags)

    def parseAxisLabel (self, what):
        token = self.nextToken ()
        axis = self.labels.axis (token)
        if axis is None:
            raise self.unknownLabel ('axis', f"Expected {what} label, got '{token}'.", token)
        return axis

    def parseAxis (self):
        scanCodeToken = self.nextToken ()
        scanCode = parseInt (scanCodeToken)
        if scanCode is None:
            raise self.error (f"Expected axis scan code number, got '{scanCodeToken}'.")
        if scanCode in self.axes:
            raise self.error (f"Duplicate entry for axis scan code '{scanCodeToken}'.", DuplicateEntry)

        token = self.nextToken ()
        if token == 'invert':
            axisInfo = InvertAxis (axis=self.parseAxisLabel ('inverted axis'))
        elif token == 'split':
            splitToken = self.nextToken ()
            splitValue = parseInt (splitToken)
            if splitValue is None:
                raise self.error (f"Expected split value, got '{splitToken}'.")
            low = self.parseAxisLabel ('low axis')
            high = self.parseAxisLabel ('high axis')
            axisInfo = SplitAxis (low=low, high=high, splitValue=splitValue)
        else:
            axis = self.labels.axis (token)
            if axis is None:
                raise self.unknownLabel ('axis',
                        f"Expected axis label, 'split' or 'invert', got '{token}'.", token)
            axisInfo = PlainAxis (axis=axis)

        while True:
            self.tokenizer.skipDelimiters (WHITESPACE)
            if self.atEndOfDirective ():
                break

            keyword = self.tokenizer.nextToken (WHITESPACE)
            if keyword != 'flat':
                raise self.error (f"Expected keyword 'flat', got '{keyword}'.")
            flatToken = self.nextToken ()
            flatOverride = parseInt (flatToken)
            if flatOverride is None:
                raise self.error (f"Expected flat value, got '{flatToken}'.")
            axisInfo = axisInfo._replace (flatOverride=flatOverride)

        logger.debug (f'Parsed axis: scanCode={scanCode}, {axisInfo}.')
        self.axes[scanCode] = axisInfo

    def parseLed (self):
        mapUsage, code, codeToken = self.parseCode ('led')
        codeName = 'usage' if mapUsage else 'scan code'
        table = self.ledsByUsageCode if mapUsage else self.ledsByScanCode
        if code in table:
            raise self.error (f"Duplicate entry for led {codeName} '{codeToken}'.", DuplicateEntry)

        ledCodeToken = self.nextToken ()
        ledCode = self.labels.led (ledCodeToken)
        if ledCode is None:
            raise self.unknownLabel ('led',
                    f"Expected LED code label, got '{ledCodeToken}'.", ledCodeToken)

        logger.debug (f'Parsed led {codeName}: code={code}, ledCode={ledCode}.')
        table[code] = LedEntry (ledCode=ledCode)

    def parseSensor (self):
        """ sensor <abs code> <sensor type> <X|Y|Z> """
        codeToken = self.nextToken ()
        code = parseInt (codeToken)
        if code is None:
            raise self.error (f"Expected sensor abs code number, got '{codeToken}'.")
        if code in self.sensors:
            raise self.error (f"Duplicate entry for sensor abs code '{codeToken}'.", DuplicateEntry)

        sensorTypeToken = self.nextToken ()
        sensorType = parseSensorType (sensorTypeToken)
        if sensorType is None:
            raise self.error (f"Expected sensor code label, got '{sensorTypeToken}'.", UnknownLabel)

        indexToken = self.nextToken ()
        dataIndex = sensorDataIndex.get (indexToken)
        if dataIndex is None:
            raise self.error (f"Expected sensor data index label, got '{indexToken}'.")

        logger.debug (f'Parsed sensor: abs code={code}, sensorType={sensorType.name}, '
                f'sensorDataIndex={dataIndex}.')
        self.sensors[code] = SensorEntry (sensorType=sensorType, dataIndex=dataIndex)

    def parseRequiredKernelConfig (self):
        """ The layout is only usable if this kernel option is enabled """
        name = self.nextToken ()
        if not name:
            raise self.error ('Expected kernel config name.')
        if name in self.requiredKernelConfigs:
            raise self.error (f'Duplicate entry for required kernel config {name}.', DuplicateEntry)
        self.requiredKernelConfigs.add (name)
        logger.debug (f'Parsed required kernel config: name={name}')
