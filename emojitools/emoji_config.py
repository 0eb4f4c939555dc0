#!/usr/bin/env python
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

"""Read config file for emojitools.

The first file found among the one named by $EMOJITOOLS_CONFIG,
'~/.emojiconfig' and '/usr/local/share/emojitools/config' is read.  It
should contain lines consisting of a name, '=' and a value.  The name we
expect is 'emoji_data', the absolute path of a directory holding
emoji-data.txt, emoji-test.txt and emoji-valid-subdivisions.txt, for
running against newer Unicode data than the copy bundled with the package.

Running without a config file is fine, the bundled data is used.
"""

import os
from os import path

_BUNDLED_DATA_DIR = path.join(path.abspath(path.dirname(__file__)), 'data')

values = {}
_config_path = None  # so we know


def _config_paths():
  paths = [path.expanduser('~/.emojiconfig'),
           '/usr/local/share/emojitools/config']
  env_path = os.environ.get('EMOJITOOLS_CONFIG')
  if env_path:
    paths.insert(0, env_path)
  return paths


def _setup(paths=None):
  """The config consists of lines of the form <name> = <value>.
  values will hold a mapping from the <name> to value.
  Blank lines and lines starting with '#' are ignored."""
  global _config_path

  values.clear()
  _config_path = None
  for configfile in paths if paths is not None else _config_paths():
    if path.exists(configfile):
      with open(configfile, 'r') as f:
        for line in f:
          line = line.strip()
          if not line or line.startswith('#'):
            continue
          if '=' not in line:
            raise ValueError(
                'bad line "%s" in %s, expected name=value' % (
                    line, configfile))
          k, v = line.split('=', 1)
          values[k.strip()] = v.strip()
      _config_path = configfile
      break

_setup()


def get(key, default=''):
  return values.get(key, default)


def config_path():
  """The config file that was read, or None."""
  return _config_path


def emoji_data_dir():
  """Directory holding the emoji data files, the configured 'emoji_data'
  or the data bundled with emojitools."""
  data_dir = get('emoji_data')
  if not data_dir:
    return _BUNDLED_DATA_DIR
  data_dir = path.realpath(path.expanduser(data_dir))
  if not path.isdir(data_dir):
    raise ValueError(
        'emoji_data %s (from %s) does not exist or is not a directory' % (
            data_dir, _config_path))
  return data_dir


if __name__ == '__main__':
  keyset = set(values.keys())
  if not keyset:
    print('no keys defined, probably no emojiconfig file was found.')
  else:
    wid = max(len(k) for k in keyset)
    fmt = '%%%ds: %%s' % wid
    for k in sorted(keyset):
      print(fmt % (k, get(k)))
    print('config: %s' % _config_path)
