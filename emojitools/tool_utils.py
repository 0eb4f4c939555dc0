# Copyright 2015 Google Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Some common utilities for tools to use."""

import logging
import re


def setup_logging(loglevel):
  """Set up logging to stream to stderr.

  The loglevel is a logging level name or a level value (int or string).
  Returns False if loglevel is not one of these."""

  try:
    loglevel = int(loglevel)
  except ValueError:
    loglevel = getattr(logging, loglevel.upper(), loglevel)
  if not isinstance(loglevel, int):
    print('Could not set log level, should be one of debug, info, warning, '
          'error, critical, or a numeric value')
    return False
  logging.basicConfig(level=loglevel)
  return True


_hex_re = re.compile(r'(?:u\+|0x)?([0-9a-f]{1,6})$', re.IGNORECASE)

def parse_codepoint_seq(seq_string):
  """Returns a tuple of codepoints from a string of hex values separated by
  whitespace, commas or underscores.  Values may have a 'U+' or '0x' prefix.

  For example 'U+1F3F4 e0067 e0062 e0073 e0063 e0074 e007f' or
  '1f469_200d_1f4bb'.
  """
  seq = []
  for part in re.split(r'[\s,_]+', seq_string.strip()):
    if not part:
      continue
    m = _hex_re.match(part)
    if not m:
      raise ValueError('"%s" is not a hex codepoint' % part)
    cp = int(m.group(1), 16)
    if cp > 0x10ffff or 0xd800 <= cp <= 0xdfff:
      raise ValueError('"%s" is not a unicode scalar value' % part)
    seq.append(cp)
  if not seq:
    raise ValueError('no codepoints in "%s"' % seq_string)
  return tuple(seq)


def read_text(infile):
  """Read infile as utf-8 and return its text."""
  with open(infile, 'r', encoding='utf-8') as f:
    return f.read()
