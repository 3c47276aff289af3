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
Kernel configuration gate. Layouts may declare kernel options they depend
on, a layout is only usable if all of them are built in (y) or built as
module (m).
"""

import gzip, logging
from typing import Text, Dict, Iterable, Optional

from .errors import MissingKernelConfig, KernelConfigUnreadable

logger = logging.getLogger (__name__)

hostKernelConfig = '/proc/config.gz'
enabledValues = frozenset (['y', 'm'])

class StaticKernelConfig:
    """ Fixed set of kernel options """

    __slots__ = ('options', )

    def __init__ (self, options: Dict[Text, Text] = None):
        self.options = dict (options or {})

    def snapshot (self) -> Dict[Text, Text]:
        return dict (self.options)

class KernelConfigFile:
    """
    Kernel .config file, optionally gzip-compressed like /proc/config.gz.
    The file is read on every snapshot ().
    """

    __slots__ = ('path', )

    def __init__ (self, path: Text = hostKernelConfig):
        self.path = path

    def __repr__ (self): # pragma: no cover
        return f'<KernelConfigFile {self.path}>'

    def open (self):
        with open (self.path, 'rb') as fd:
            magic = fd.read (2)
        if magic == b'\x1f\x8b':
            return gzip.open (self.path, 'rt', encoding='utf-8', errors='replace')
        return open (self.path, 'r', encoding='utf-8', errors='replace')

    def snapshot (self) -> Dict[Text, Text]:
        try:
            with self.open () as fd:
                return parseKernelConfig (fd)
        except OSError as e:
            raise KernelConfigUnreadable (self.path, e.strerror or str (e)) from e

def parseKernelConfig (lines: Iterable[Text]) -> Dict[Text, Text]:
    """
    Parse CONFIG_FOO=value lines. Comments, including “# CONFIG_FOO is not
    set”, are skipped, quotes around string values removed.
    """
    options = dict ()
    for line in lines:
        line = line.strip ()
        if not line or line.startswith ('#'):
            continue
        try:
            name, value = line.split ('=', 1)
        except ValueError:
            logger.debug (f'ignoring malformed kernel config line {line!r}')
            continue
        if len (value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        options[name.strip ()] = value.strip ()
    return options

def checkKernelConfigs (configs: Iterable[Text], provider) -> None:
    """
    Make sure every option in configs is enabled according to provider.
    provider None means the host has no kernel configuration to check
    against, which always passes.

    Raises MissingKernelConfig for the first option that is not enabled.
    """
    configs = sorted (configs)
    if not configs or provider is None:
        return

    options = provider.snapshot ()
    for name in configs:
        value = options.get (name)
        if value is None:
            logger.info (f'Required kernel config {name} is not found')
            raise MissingKernelConfig (name)
        if value not in enabledValues:
            logger.info (f'Required kernel config {name} has option {value}')
            raise MissingKernelConfig (name, value)

def kernelConfigsArePresent (configs: Iterable[Text], provider) -> bool:
    try:
        checkKernelConfigs (configs, provider)
    except MissingKernelConfig:
        return False
    return True

def hostKernelConfigProvider () -> Optional[KernelConfigFile]:
    """ Provider for the running kernel, None if it does not expose its config """
    provider = KernelConfigFile (hostKernelConfig)
    try:
        with provider.open ():
            pass
    except OSError:
        logger.info (f'{hostKernelConfig} not readable, not checking kernel configs')
        return None
    return provider
