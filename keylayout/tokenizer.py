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
Line oriented tokenizer
"""

from typing import Text, Tuple

from .errors import OpenFailed

WHITESPACE = ' \t\r'

class Tokenizer:
    """
    Walks a text buffer line by line. Tokens never span lines, the current
    line is advanced explicitly with nextLine ().
    """

    __slots__ = ('filename', 'buf', 'pos', 'lineNumber')

    def __init__ (self, filename: Text, contents: Text):
        self.filename = filename
        self.buf = contents
        self.pos = 0
        self.lineNumber = 1

    def __repr__ (self): # pragma: no cover
        return f'<Tokenizer {self.location ()}>'

    @classmethod
    def open (cls, filename: Text):
        try:
            with open (filename, 'r', encoding='utf-8', errors='replace', newline='') as fd:
                return cls (filename, fd.read ())
        except OSError as e:
            raise OpenFailed (filename, e.strerror or str (e)) from e

    @classmethod
    def fromContents (cls, filename: Text, contents: Text):
        return cls (filename, contents)

    def location (self) -> Tuple[Text, int]:
        return (self.filename, self.lineNumber)

    def isEof (self) -> bool:
        return self.pos >= len (self.buf)

    def isEol (self) -> bool:
        return self.isEof () or self.buf[self.pos] == '\n'

    def peekChar (self) -> Text:
        """ Current character, empty string at end of file """
        return self.buf[self.pos] if not self.isEof () else ''

    def peekRemainderOfLine (self) -> Text:
        end = self.buf.find ('\n', self.pos)
        if end == -1:
            end = len (self.buf)
        return self.buf[self.pos:end]

    def nextToken (self, delimiters: Text = WHITESPACE) -> Text:
        start = self.pos
        while not self.isEol () and self.buf[self.pos] not in delimiters:
            self.pos += 1
        return self.buf[start:self.pos]

    def skipDelimiters (self, delimiters: Text = WHITESPACE):
        while not self.isEol () and self.buf[self.pos] in delimiters:
            self.pos += 1

    def nextLine (self):
        while not self.isEol ():
            self.pos += 1
        if not self.isEof ():
            # consume the newline itself
            self.pos += 1
            self.lineNumber += 1
