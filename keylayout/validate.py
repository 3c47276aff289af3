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
Check key layout files for errors
"""

import argparse, logging

from tqdm import tqdm
import yaml

from .labels import labelLoader, defaultLabels
from .kernelconfig import KernelConfigFile, hostKernelConfigProvider
from .loader import load
from .errors import KeyLayoutError

def labelsload (s):
    try:
        return labelLoader[s]
    except (KeyError, OSError):
        raise argparse.ArgumentTypeError(f'Cannot open file {s}')
    except (yaml.YAMLError, AttributeError, ValueError) as e:
        raise argparse.ArgumentTypeError(f'Invalid label file {s}: {e}')

def kernelconfigload (s):
    provider = KernelConfigFile (s)
    try:
        with provider.open ():
            pass
    except OSError:
        raise argparse.ArgumentTypeError(f'Cannot open file {s}')
    return provider

def validate (argv=None):
    parser = argparse.ArgumentParser(description='Validate key layout files.')
    parser.add_argument('-l', '--labels', metavar='FILE', type=labelsload,
            default=defaultLabels, help='Label vocabulary, YAML file or bundled name')
    group = parser.add_mutually_exclusive_group ()
    group.add_argument('-k', '--kernel-config', dest='kernelConfig', metavar='FILE',
            type=kernelconfigload, help='Check requires_kernel_config against this kernel .config')
    group.add_argument('--host-kernel-config', dest='hostKernelConfig', action='store_true',
            help='Check requires_kernel_config against the running kernel')
    parser.add_argument('-v', '--verbose', action='store_true', help='Trace parser')
    parser.add_argument('files', metavar='FILE', nargs='+', help='Key layout file')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig (level=logging.DEBUG)
    else:
        logging.basicConfig (level=logging.INFO)

    kernelConfig = args.kernelConfig
    if args.hostKernelConfig:
        kernelConfig = hostKernelConfigProvider ()

    failed = 0
    files = args.files
    if len (files) > 1:
        files = tqdm (files, unit='file')
    for f in files:
        try:
            layout = load (f, labels=args.labels, kernelConfig=kernelConfig)
        except KeyLayoutError as e:
            logging.error (f'{f}: {e}')
            failed += 1
        else:
            logging.info (f'{f}: {len (layout.keysByScanCode)} scan codes, '
                    f'{len (layout.keysByUsageCode)} usages, {len (layout.axes)} axes, '
                    f'{len (layout.ledsByScanCode)+len (layout.ledsByUsageCode)} leds, '
                    f'{len (layout.sensors)} sensors')

    if failed:
        logging.error (f'{failed}/{len (args.files)} files failed')
        return 1
    return 0
