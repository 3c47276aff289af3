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
Errors raised while loading key layout files
"""

from typing import Text, Optional

class KeyLayoutError (Exception):
    """ Base class for everything a load can fail with """
    pass

class OpenFailed (KeyLayoutError):
    """ The file could not be read """

    def __init__ (self, filename: Text, reason: Text):
        super ().__init__ (f'Error opening key layout map file {filename}: {reason}')
        self.filename = filename
        self.reason = reason

class ParseError (KeyLayoutError):
    """ Syntax or semantic error at a specific location """

    def __init__ (self, filename: Text, line: int, message: Text):
        super ().__init__ (f'{filename}:{line}: {message}')
        self.filename = filename
        self.line = line
        self.message = message

    @property
    def location (self) -> Text:
        return f'{self.filename}:{self.line}'

class DuplicateEntry (ParseError):
    pass

class UnknownLabel (ParseError):
    pass

class MissingKernelConfig (KeyLayoutError):
    """
    A required kernel option is not enabled. value is None if the option is
    absent altogether.
    """

    def __init__ (self, option: Text, value: Optional[Text] = None):
        if value is None:
            msg = f'Required kernel config {option} is not found'
        else:
            msg = f'Required kernel config {option} has option {value}'
        super ().__init__ (msg)
        self.option = option
        self.value = value

class KernelConfigUnreadable (KeyLayoutError):
    """ The kernel configuration a layout is checked against could not be read """

    def __init__ (self, path: Text, reason: Text):
        super ().__init__ (f'Error reading kernel config {path}: {reason}')
        self.path = path
        self.reason = reason

class InternalError (KeyLayoutError):
    pass
