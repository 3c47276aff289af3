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

import pytest

from .layout import KeyLayout, KeyEntry, LedEntry, SensorEntry, SensorType, \
        PlainAxis, InvertAxis, SplitAxis, AxisMode, POLICY_FLAG_WAKE, \
        POLICY_FLAG_FUNCTION, POLICY_FLAG_FALLBACK_USAGE_MAPPING

A = 29
B = 30

@pytest.fixture
def layout ():
    """ Layout with overlapping scan code and usage entries """
    return KeyLayout (
            keysByScanCode={
                30: KeyEntry (A, 0),
                31: KeyEntry (B, POLICY_FLAG_WAKE),
                59: KeyEntry (A, POLICY_FLAG_FUNCTION),
                60: KeyEntry (A, POLICY_FLAG_WAKE),
                },
            keysByUsageCode={
                0x00070004: KeyEntry (B, 0),
                0x00070005: KeyEntry (A, POLICY_FLAG_FALLBACK_USAGE_MAPPING),
                0x000c0001: KeyEntry (A, POLICY_FLAG_WAKE),
                },
            axes={
                0x00: PlainAxis (0),
                0x11: SplitAxis (15, 16, 75, flatOverride=4096),
                },
            ledsByScanCode={0x00: LedEntry (0), 0x01: LedEntry (1), 0x02: LedEntry (1)},
            ledsByUsageCode={0x00080001: LedEntry (0)},
            sensors={0x03: SensorEntry (SensorType.GYROSCOPE, 0)},
            requiredKernelConfigs=['CONFIG_HID_PLAYSTATION'],
            )

def test_mapKey (layout):
    assert layout.mapKey (30, 0) == KeyEntry (A, 0)
    assert layout.mapKey (31) == (B, POLICY_FLAG_WAKE)
    assert layout.mapKey (0, 0x000c0001) == KeyEntry (A, POLICY_FLAG_WAKE)

    with pytest.raises (KeyError):
        layout.mapKey (0, 0)
    with pytest.raises (KeyError):
        layout.mapKey (32, 0)
    with pytest.raises (KeyError):
        layout.mapKey (0, 0x00070006)

def test_mapKey_usage_priority (layout):
    """ Usage codes win over scan codes """
    for usage, entry in layout.keysByUsageCode.items ():
        for scanCode in list (layout.keysByScanCode.keys ()) + [0, 1234]:
            assert layout.mapKey (scanCode, usage) == entry

def test_mapKey_usage_fallback (layout):
    """ Unknown usage falls back to the scan code """
    assert layout.mapKey (31, 0x00070099) == KeyEntry (B, POLICY_FLAG_WAKE)

def test_mapKey_zero_sentinel ():
    layout = KeyLayout (keysByScanCode={0: KeyEntry (A, 0)}, keysByUsageCode={0: KeyEntry (B, 0)})
    with pytest.raises (KeyError):
        layout.mapKey (0, 0)
    assert layout.getKey (0, 0) is None

def test_mapAxis (layout):
    assert layout.mapAxis (0x00) == PlainAxis (0)
    assert layout.mapAxis (0x00).mode == AxisMode.PLAIN
    split = layout.mapAxis (0x11)
    assert split.mode == AxisMode.SPLIT
    assert (split.axis, split.highAxis, split.splitValue, split.flatOverride) == (15, 16, 75, 4096)
    assert layout.mapAxis (0x12) is None

def test_axis_variants_differ ():
    assert PlainAxis (1) != InvertAxis (1)
    assert not PlainAxis (1) == InvertAxis (1)
    assert PlainAxis (1) == PlainAxis (1, None)
    assert InvertAxis (1, 5) != InvertAxis (1, 6)
    assert len ({PlainAxis (1), InvertAxis (1), PlainAxis (1)}) == 2

def test_mapSensor (layout):
    assert layout.mapSensor (0x03) == (SensorType.GYROSCOPE, 0)
    with pytest.raises (KeyError, match="Can't find abs code 4."):
        layout.mapSensor (0x04)

def test_findScanCodesForKey (layout):
    # 59 has the FUNCTION flag
    assert layout.findScanCodesForKey (A) == [30, 60]
    assert layout.findScanCodesForKey (B) == [31]
    assert layout.findScanCodesForKey (1234) == []

def test_findUsageCodesForKey (layout):
    # 0x00070005 is a fallback mapping
    assert layout.findUsageCodesForKey (A) == [0x000c0001]
    assert layout.findUsageCodesForKey (B) == [0x00070004]

def test_reverse_lookup_filter (layout):
    for keyCode in (A, B):
        for scanCode in layout.findScanCodesForKey (keyCode):
            assert not layout.keysByScanCode[scanCode].flags & POLICY_FLAG_FUNCTION
        for usage in layout.findUsageCodesForKey (keyCode):
            assert not layout.keysByUsageCode[usage].flags & POLICY_FLAG_FALLBACK_USAGE_MAPPING

def test_findLed (layout):
    assert layout.findScanCodeForLed (0) == 0x00
    # first match
    assert layout.findScanCodeForLed (1) == 0x01
    assert layout.findScanCodeForLed (7) is None
    assert layout.findUsageCodeForLed (0) == 0x00080001
    assert layout.findUsageCodeForLed (1) is None

def test_lookup_stable (layout):
    assert layout.findScanCodesForKey (A) == layout.findScanCodesForKey (A)
    assert layout.findScanCodeForLed (1) == layout.findScanCodeForLed (1)

def test_immutable (layout):
    with pytest.raises (AttributeError):
        layout.foo = 1
    with pytest.raises (AttributeError):
        layout._keysByScanCode = {}
    with pytest.raises (AttributeError):
        del layout._axes
    with pytest.raises (TypeError):
        layout.keysByScanCode[99] = KeyEntry (A, 0)
    with pytest.raises (AttributeError):
        layout.requiredKernelConfigs.add ('CONFIG_FOO')

def test_private_copy ():
    keys = {1: KeyEntry (A, 0)}
    configs = {'CONFIG_A'}
    layout = KeyLayout (keysByScanCode=keys, requiredKernelConfigs=configs)
    keys[2] = KeyEntry (B, 0)
    configs.add ('CONFIG_B')
    assert layout.keysByScanCode == {1: KeyEntry (A, 0)}
    assert layout.requiredKernelConfigs == {'CONFIG_A'}

def test_equality (layout):
    assert KeyLayout () == KeyLayout ()
    assert layout != KeyLayout ()
    named = layout.withFilename ('Vendor_054c_Product_0ce6.kl')
    assert named.filename == 'Vendor_054c_Product_0ce6.kl'
    assert layout.filename is None
    # the file name does not matter
    assert named == layout
    assert KeyLayout (axes={1: PlainAxis (0)}) != KeyLayout (axes={1: InvertAxis (0)})
