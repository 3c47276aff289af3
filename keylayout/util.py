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
Misc utilities
"""

import yaml
from importlib import resources

def limit (l, n):
    """ Limit the number of items drawn from iterable l to n. """
    it = iter (l)
    for i in range (n):
        try:
            yield next (it)
        except StopIteration:
            break

class YamlLoader:
    """
    Simple YAML loader that searches the current path and the package’s
    resources (for defaults)
    """

    __slots__ = ('defaultDir', 'deserialize')

    def __init__ (self, defaultDir, deserialize):
        self.defaultDir = defaultDir
        self.deserialize = deserialize

    def _resource (self, name):
        return resources.files (__package__).joinpath (self.defaultDir).joinpath (name)

    def __getitem__ (self, k, onlyRes=False):
        openfunc = []
        if not onlyRes:
            openfunc.append (lambda k: open (k, 'r'))
        # try with and without appending extension
        openfunc.append (lambda k: self._resource (k + '.yaml').open ('r'))
        openfunc.append (lambda k: self._resource (k).open ('r'))
        for f in openfunc:
            try:
                with f (k) as fd:
                    return self.deserialize (yaml.safe_load (fd))
            except (FileNotFoundError, IsADirectoryError):
                pass
            except yaml.reader.ReaderError:
                pass

        raise KeyError (k)
