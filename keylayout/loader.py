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

import logging, time
from typing import Text

from .tokenizer import Tokenizer
from .parser import Parser
from .layout import KeyLayout
from .labels import defaultLabels
from .kernelconfig import checkKernelConfigs
from .errors import InternalError, MissingKernelConfig

logger = logging.getLogger (__name__)

def loadTokenizer (tokenizer: Tokenizer, labels=defaultLabels) -> KeyLayout:
    start = time.monotonic ()
    try:
        layout = Parser (tokenizer, labels).parse ()
    except MemoryError as e:
        raise InternalError ('Error allocating key layout map.') from e
    elapsed = time.monotonic () - start
    filename, lines = tokenizer.location ()
    logger.debug (f"Parsed key layout map file '{filename}' {lines} lines in {elapsed*1000:0.3f}ms.")
    return layout

def _publish (tokenizer: Tokenizer, labels, kernelConfig) -> KeyLayout:
    layout = loadTokenizer (tokenizer, labels)
    try:
        checkKernelConfigs (layout.requiredKernelConfigs, kernelConfig)
    except MissingKernelConfig:
        logger.info (f'Not loading {tokenizer.filename} because the required kernel configs are not set')
        raise
    return layout.withFilename (tokenizer.filename)

def load (filename: Text, labels=defaultLabels, kernelConfig=None) -> KeyLayout:
    """
    Load key layout file filename.

    labels resolves symbolic names, kernelConfig is a provider with a
    .snapshot () method or None if the host has no kernel config to check
    requires_kernel_config directives against.

    Raises OpenFailed, ParseError (and subclasses), MissingKernelConfig or
    InternalError.
    """
    return _publish (Tokenizer.open (filename), labels, kernelConfig)

def loadContents (filename: Text, contents: Text, labels=defaultLabels, kernelConfig=None) -> KeyLayout:
    """ Like load (), but parse contents. filename is used for diagnostics only """
    return _publish (Tokenizer.fromContents (filename, contents), labels, kernelConfig)
