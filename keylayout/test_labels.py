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
import yaml

from .labels import LabelResolver, LabelTable, defaultLabels, labelLoader
from .layout import POLICY_FLAG_WAKE, POLICY_FLAG_VIRTUAL, POLICY_FLAG_FUNCTION, \
        POLICY_FLAG_GESTURE, POLICY_FLAG_FALLBACK_USAGE_MAPPING, KEYCODE_UNKNOWN

def test_defaults ():
    assert defaultLabels.keyCode ('UNKNOWN') == KEYCODE_UNKNOWN
    assert defaultLabels.keyCode ('A') == 29
    assert defaultLabels.keyCode ('0') == 7
    assert defaultLabels.keyCode ('11') == 227
    assert defaultLabels.keyCode ('3D_MODE') == 206
    assert defaultLabels.keyCode ('ESCAPE') == 111
    assert defaultLabels.keyCode ('SCREENSHOT') == 318
    assert defaultLabels.axis ('X') == 0
    assert defaultLabels.axis ('HAT_X') == 15
    assert defaultLabels.axis ('GENERIC_1') == 32
    assert defaultLabels.led ('CAPS_LOCK') == 1
    assert defaultLabels.led ('CONTROLLER_1') == 0x10

    for label in ('KEYCODE_A', 'a', '', 'NONEXISTENT'):
        assert defaultLabels.keyCode (label) is None
    assert defaultLabels.keyFlag ('A') is None
    assert defaultLabels.axis ('A') is None
    assert defaultLabels.led ('A') is None

def test_default_flags ():
    assert defaultLabels.keyFlag ('WAKE') == POLICY_FLAG_WAKE
    assert defaultLabels.keyFlag ('VIRTUAL') == POLICY_FLAG_VIRTUAL
    assert defaultLabels.keyFlag ('FUNCTION') == POLICY_FLAG_FUNCTION
    assert defaultLabels.keyFlag ('GESTURE') == POLICY_FLAG_GESTURE
    assert defaultLabels.keyFlag ('FALLBACK_USAGE_MAPPING') == POLICY_FLAG_FALLBACK_USAGE_MAPPING

def test_keycodes_unique ():
    """ Every key code has exactly one label """
    values = [v for k, v in defaultLabels.keycodes.items ()]
    assert len (values) == len (set (values))
    assert sorted (values) == list (range (len (values)))

def test_flag_single_bit ():
    with pytest.raises (ValueError):
        LabelResolver ('broken', {}, {'BOTH': 0x3}, {}, {})
    with pytest.raises (ValueError):
        LabelResolver ('broken', {}, {'NONE': 0}, {}, {})

def test_table ():
    t = LabelTable ('test', {'VOLUME_UP': 24, 'VOLUME_DOWN': 25, 0: 7})
    assert len (t) == 3
    assert 'VOLUME_UP' in t
    assert 'VOLUME' not in t
    # numeric yaml keys are turned into strings
    assert t['0'] == 7
    assert t.get ('VOLUME') is None
    with pytest.raises (KeyError):
        t['VOLUME']

def test_suggest ():
    t = LabelTable ('test', {'VOLUME_UP': 24, 'VOLUME_DOWN': 25, 'VOLUME_MUTE': 164,
            'MEDIA_PLAY': 126, 'MEDIA_PLAY_PAUSE': 85})
    assert t.suggest ('VOL') == ['VOLUME_DOWN', 'VOLUME_MUTE', 'VOLUME_UP']
    assert len (t.suggest ('VOL', n=2)) == 2
    assert t.suggest ('MEDIA_PLAY_PAUSED') == ['MEDIA_PLAY_PAUSE']
    assert t.suggest ('MEDIA_PLAYX') == ['MEDIA_PLAY']
    assert t.suggest ('XYZ') == []
    assert t.suggest ('') == []

    assert defaultLabels.suggest ('axis', 'HAT') == ['HAT_X', 'HAT_Y']

def test_loader (tmp_path):
    data = {'name': 'custom', 'keycodes': {'FOO': 1}, 'flags': {'BAR': 2},
            'axes': {'AX': 3}, 'leds': {'LIGHT': 4}}
    path = tmp_path / 'custom.yaml'
    with open (path, 'w') as fd:
        yaml.safe_dump (data, fd)
    labels = labelLoader[str (path)]
    assert labels.name == 'custom'
    assert (labels.keyCode ('FOO'), labels.keyFlag ('BAR'), labels.axis ('AX'), labels.led ('LIGHT')) \
            == (1, 2, 3, 4)

    with pytest.raises (KeyError):
        labelLoader[str (tmp_path / 'nonexistent')]

def test_loader_resources ():
    assert labelLoader['labels'].keyCode ('A') == 29
