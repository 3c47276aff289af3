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
Symbolic label vocabulary: key codes, policy flags, axes and LEDs
"""

from typing import Text, Dict, Optional, List

from pygtrie import CharTrie

from .util import YamlLoader, limit

class LabelTable:
    """ Label to integer mapping of one kind, e.g. key codes """

    __slots__ = ('kind', 't')

    def __init__ (self, kind: Text, labels: Dict[Text, int]):
        self.kind = kind
        t = self.t = CharTrie ()
        for name, value in labels.items ():
            # yaml turns unquoted numeric labels like 0 into integers
            t[str (name)] = int (value)

    def __repr__ (self): # pragma: no cover
        return f'<LabelTable {self.kind}: {len (self)} labels>'

    def __len__ (self):
        return len (self.t)

    def __contains__ (self, name: Text):
        return self.t.has_key (name)

    def __getitem__ (self, name: Text) -> int:
        return self.t[name]

    def get (self, name: Text) -> Optional[int]:
        return self.t.get (name)

    def items (self):
        return self.t.items ()

    def suggest (self, name: Text, n: int = 3) -> List[Text]:
        """
        Find up to n known labels close to name: completions first, then the
        longest known label name starts with.
        """
        if name and self.t.has_subtrie (name):
            return sorted (limit (self.t.iterkeys (prefix=name), n))
        p = self.t.longest_prefix (name)
        if p.key is not None:
            return [p.key]
        return []

class LabelResolver:
    """
    Resolves the symbolic names used in key layout files. Every lookup
    returns None for unknown labels.
    """

    __slots__ = ('name', 'keycodes', 'flags', 'axes', 'leds')

    def __init__ (self, name: Text, keycodes: Dict, flags: Dict, axes: Dict, leds: Dict):
        self.name = name
        self.keycodes = LabelTable ('key code', keycodes)
        self.flags = LabelTable ('key flag', flags)
        self.axes = LabelTable ('axis', axes)
        self.leds = LabelTable ('led', leds)
        for flag, bit in self.flags.items ():
            if bit <= 0 or bit & (bit-1) != 0:
                raise ValueError (f'key flag {flag} must be a single bit, got {bit:#x}')

    def __repr__ (self): # pragma: no cover
        return f'<LabelResolver {self.name}>'

    def keyCode (self, name: Text) -> Optional[int]:
        return self.keycodes.get (name)

    def keyFlag (self, name: Text) -> Optional[int]:
        return self.flags.get (name)

    def axis (self, name: Text) -> Optional[int]:
        return self.axes.get (name)

    def led (self, name: Text) -> Optional[int]:
        return self.leds.get (name)

    def suggest (self, kind: Text, name: Text) -> List[Text]:
        table = {
            'keyCode': self.keycodes,
            'keyFlag': self.flags,
            'axis': self.axes,
            'led': self.leds,
            }[kind]
        return table.suggest (name)

    @classmethod
    def deserialize (cls, data: Dict):
        return cls (data.get ('name'), data.get ('keycodes', {}),
                data.get ('flags', {}), data.get ('axes', {}),
                data.get ('leds', {}))

dataDirectory = 'data'
labelLoader = YamlLoader (dataDirectory, LabelResolver.deserialize)
defaultLabels = labelLoader.__getitem__ ('labels', onlyRes=True)
