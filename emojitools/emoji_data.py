#!/usr/bin/env python
# -*- coding: utf-8 -*-#
# Copyright 2014 Google Inc. All rights reserved.
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

"""Emoji property and sequence database.

Reads the UTS #51 data files shipped in emojitools/data (or the directory
configured as 'emoji_data', see emoji_config) into an immutable
EmojiDatabase: a codepoint to property table, the region flag, tag and zwj
sequence tables with their recommended subsets, and the group/subgroup
tree from emoji-test.txt.

The database is built the first time get_database() is called and is
shared, read-only, from then on.
"""

import bisect
import collections
import logging
from os import path
import re
import threading

from fontTools import unicodedata

from emojitools import emoji_config

logger = logging.getLogger('emojitools.emoji_data')

# Update this when we update the emoji-test.txt data we use
EMOJI_VERSION = 15.1

# Declaration order of the properties in emoji-data.txt.  Property tuples
# returned by the table are always in this order.
PROPERTY_NAMES = (
    'Emoji',
    'Emoji_Presentation',
    'Emoji_Modifier',
    'Emoji_Modifier_Base',
    'Emoji_Component',
    'Extended_Pictographic')
_PROPERTY_ORDER = {name: i for i, name in enumerate(PROPERTY_NAMES)}

RECOMMENDED = 'recommended'
VALID = 'valid'
POLICIES = (RECOMMENDED, VALID)

ZWJ = 0x200d
KEYCAP = 0x20e3
TEXT_VS = 0xfe0e
EMOJI_VS = 0xfe0f
BLACK_FLAG = 0x1f3f4
CANCEL_TAG = 0xe007f

_KEYCAP_BASES = frozenset(ord(c) for c in '0123456789#*')

_DATA_FILES = {
    'properties': 'emoji-data.txt',
    'test': 'emoji-test.txt',
    'subdivisions': 'emoji-valid-subdivisions.txt',
}


class PropertyTable(object):
  """Maps codepoints to the tuple of emoji properties they hold.

  Ranges are sorted and do not overlap, lookup is a bisect over the range
  starts.  Codepoints outside every range have no properties.
  """

  def __init__(self, ranges):
    self._ranges = tuple(ranges)
    self._starts = [r[0] for r in self._ranges]

  @classmethod
  def from_assignments(cls, assignments):
    """Build a table from (start, end, property) triples.

    The triples may overlap, one per line of emoji-data.txt.  Each
    resulting range carries every property assigned to it, and neighboring
    ranges with the same properties are merged."""
    events = collections.defaultdict(list)
    for start, end, prop in assignments:
      if prop not in _PROPERTY_ORDER:
        raise ValueError('unknown emoji property "%s"' % prop)
      if end < start:
        raise ValueError('bad range %04x..%04x for %s' % (start, end, prop))
      events[start].append((1, prop))
      events[end + 1].append((-1, prop))

    active = collections.Counter()
    ranges = []
    points = sorted(events)
    for i, point in enumerate(points[:-1]):
      for delta, prop in events[point]:
        active[prop] += delta
      props = tuple(p for p in PROPERTY_NAMES if active[p] > 0)
      if not props:
        continue
      end = points[i + 1] - 1
      if ranges and ranges[-1][1] == point - 1 and ranges[-1][2] == props:
        ranges[-1] = (ranges[-1][0], end, props)
      else:
        ranges.append((point, end, props))
    return cls(ranges)

  def get(self, cp):
    """Return the property tuple of cp, empty if it has none."""
    ix = bisect.bisect_right(self._starts, cp) - 1
    if ix >= 0:
      _, end, props = self._ranges[ix]
      if cp <= end:
        return props
    return ()

  def has(self, cp, prop):
    return prop in self.get(cp)

  def chars_with_property(self, prop):
    result = set()
    for start, end, props in self._ranges:
      if prop in props:
        result.update(range(start, end + 1))
    return frozenset(result)

  def ranges(self):
    return self._ranges

  def __len__(self):
    return len(self._ranges)


class SequenceTable(object):
  """Valid codepoint sequences of one kind, with the recommended subset."""

  def __init__(self, valid=(), recommended=()):
    self.recommended = frozenset(recommended)
    self.valid = frozenset(valid) | self.recommended

  def sequences(self, policy):
    if policy == RECOMMENDED:
      return self.recommended
    if policy == VALID:
      return self.valid
    raise ValueError(
        'unknown sequence policy "%s", expected one of %s' % (
            policy, ', '.join(POLICIES)))

  def __contains__(self, seq):
    return seq in self.valid


class EmojiDatabase(object):
  """The tables the matchers and the listing are built from.

  region_flags is a frozenset of regional indicator pairs; tag_sequences
  and zwj_sequences are SequenceTables; groups maps group to subgroup to a
  tuple of (sequence, name) pairs in emoji-test order; names maps
  sequences with emoji variation selectors stripped to their names.
  """

  def __init__(self, properties, region_flags=(), tag_sequences=None,
               zwj_sequences=None, groups=None, names=None):
    self.properties = properties
    self.region_flags = frozenset(region_flags)
    self.tag_sequences = tag_sequences or SequenceTable()
    self.zwj_sequences = zwj_sequences or SequenceTable()
    self.groups = groups or collections.OrderedDict()
    self.names = names or {}


# Vendor sequences that are well-formed and shipped by some platforms but
# are not recommended by Unicode.  The wrestler skin tone sequences shipped
# with Android, the cat sequences with Windows.
#
# This data is in the format of emoji-zwj-sequences.txt
_SUPPLEMENTAL_VALID_ZWJ_SEQUENCES = """
1F920 200D 1F922           ; Emoji_ZWJ_Sequence ; vomiting cowboy # 10.0
1F431 200D 1F464           ; Emoji_ZWJ_Sequence ; ninja cat # 7.0
1F431 200D 1F3CD           ; Emoji_ZWJ_Sequence ; stunt cat # 7.0
1F431 200D 1F4BB           ; Emoji_ZWJ_Sequence ; hacker cat # 7.0
1F431 200D 1F409           ; Emoji_ZWJ_Sequence ; dino cat # 7.0
1F431 200D 1F453           ; Emoji_ZWJ_Sequence ; hipster cat # 7.0
1F431 200D 1F680           ; Emoji_ZWJ_Sequence ; astro cat # 7.0
1F93C 1F3FB 200D 2642 FE0F ; Emoji_ZWJ_Sequence ; men wrestling: light skin tone # 9.0
1F93C 1F3FC 200D 2642 FE0F ; Emoji_ZWJ_Sequence ; men wrestling: medium-light skin tone # 9.0
1F93C 1F3FD 200D 2642 FE0F ; Emoji_ZWJ_Sequence ; men wrestling: medium skin tone # 9.0
1F93C 1F3FE 200D 2642 FE0F ; Emoji_ZWJ_Sequence ; men wrestling: medium-dark skin tone # 9.0
1F93C 1F3FF 200D 2642 FE0F ; Emoji_ZWJ_Sequence ; men wrestling: dark skin tone # 9.0
1F93C 1F3FB 200D 2640 FE0F ; Emoji_ZWJ_Sequence ; women wrestling: light skin tone # 9.0
1F93C 1F3FC 200D 2640 FE0F ; Emoji_ZWJ_Sequence ; women wrestling: medium-light skin tone # 9.0
1F93C 1F3FD 200D 2640 FE0F ; Emoji_ZWJ_Sequence ; women wrestling: medium skin tone # 9.0
1F93C 1F3FE 200D 2640 FE0F ; Emoji_ZWJ_Sequence ; women wrestling: medium-dark skin tone # 9.0
1F93C 1F3FF 200D 2640 FE0F ; Emoji_ZWJ_Sequence ; women wrestling: dark skin tone # 9.0
"""


def open_emoji_data_file(data_file_name, data_dir=None):
  """Opens one of the emoji data files.

  Args:
    data_file_name: A string containing the filename of the data file.
    data_dir: The directory to read from, defaults to the configured one.

  Returns:
    A file handle to the data file.
  """
  if data_dir is None:
    data_dir = emoji_config.emoji_data_dir()
  return open(path.join(data_dir, data_file_name), 'r', encoding='utf-8')


def _read_emoji_property_data(lines):
  """Parse lines of emoji-data.txt and return a list of (start, end,
  property) triples.

  Example data:
    0023          ; Emoji                # [1]
    1F3FB..1F3FF  ; Emoji_Modifier       # [5]
  """
  line_re = re.compile(
      r'([0-9A-F]{4,6})(?:\.\.([0-9A-F]{4,6}))?\s*;\s*'
      r'(%s)\s*(?:#.*)?$' % '|'.join(PROPERTY_NAMES))
  result = []
  for line in lines:
    line = line.strip()
    if not line or line[0] == '#':
      continue
    m = line_re.match(line)
    if not m:
      raise ValueError('Did not match "%s"' % line)
    start = int(m.group(1), 16)
    end = start if not m.group(2) else int(m.group(2), 16)
    result.append((start, end, m.group(3)))
  return result


EMOJI_SEQUENCE_TYPES = frozenset([
    'Basic_Emoji',
    'Emoji_Keycap_Sequence',
    'RGI_Emoji_Flag_Sequence',
    'RGI_Emoji_Tag_Sequence',
    'RGI_Emoji_Modifier_Sequence',
    'RGI_Emoji_ZWJ_Sequence',
    'Emoji_ZWJ_Sequence'])

def _read_emoji_sequence_data(lines):
  """Parse lines in emoji-sequences.txt / emoji-zwj-sequences.txt format and
  return a map from sequence to tuples of name, age, type."""
  line_re = re.compile(
      r'([0-9A-F ]+);\s*(%s)\s*;\s*([^#]*)\s*#\s*E?(\d+\.\d+).*' %
      '|'.join(sorted(EMOJI_SEQUENCE_TYPES)))
  result = {}
  for line in lines:
    line = line.strip()
    if not line or line[0] == '#':
      continue
    m = line_re.match(line)
    if not m:
      raise ValueError('Did not match "%s"' % line)
    seq = tuple(int(s, 16) for s in m.group(1).split())
    result[seq] = (m.group(3).strip(), float(m.group(4)), m.group(2))
  return result


EMOJI_QUALIFICATIONS = (
    'component', 'fully-qualified', 'minimally-qualified', 'unqualified')

def _read_emoji_test_data(lines):
  """Parse the emoji-test.txt data.  Returns a list of tuples of
  sequence, status, group, subgroup, name in file order."""
  line_re = re.compile(
      r'([0-9A-Fa-f ]+?)\s*;\s*(%s)\s*#\s*\S+\s+(?:E\d+\.\d+\s+)?(.*?)\s*$' %
      '|'.join(EMOJI_QUALIFICATIONS))
  result = []
  GROUP_PREFIX = '# group: '
  SUBGROUP_PREFIX = '# subgroup: '
  group = None
  subgroup = None
  for line in lines:
    line = line.strip()
    if not line:
      continue

    if line[0] == '#':
      if line.startswith(GROUP_PREFIX):
        group = line[len(GROUP_PREFIX):].strip()
        subgroup = None
      elif line.startswith(SUBGROUP_PREFIX):
        subgroup = line[len(SUBGROUP_PREFIX):].strip()
      continue

    m = line_re.match(line)
    if not m:
      raise ValueError('Did not match "%s" in emoji-test.txt' % line)
    seq = tuple(int(s, 16) for s in m.group(1).split())
    if not (group and subgroup):
      raise ValueError(
          'sequence %s missing group or subgroup' % seq_to_string(seq))
    result.append((seq, m.group(2), group, subgroup, m.group(3)))

  return result


def _read_subdivision_data(lines):
  """Parse lines of 'code ; name' and return a list of (code, name)."""
  line_re = re.compile(r'([a-z]{2}[a-z0-9]{1,3})\s*;\s*(.+)$')
  result = []
  for line in lines:
    line = line.split('#', 1)[0].strip()
    if not line:
      continue
    m = line_re.match(line)
    if not m:
      raise ValueError('Did not match "%s" in subdivision data' % line)
    result.append((m.group(1), m.group(2).strip()))
  return result


def subdivision_to_tag_seq(code):
  """Return the emoji tag sequence for a subdivision code like 'gbsct'."""
  return (BLACK_FLAG,) + tuple(0xe0000 + ord(c) for c in code) + (CANCEL_TAG,)


def tag_seq_to_subdivision(seq):
  """Return the subdivision code spelled by a tag sequence, e.g. 'gbsct'."""
  if not is_regional_tag_seq(seq):
    raise ValueError('%s is not a tag sequence' % seq_to_string(seq))
  return ''.join(chr(cp - 0xe0000) for cp in seq[1:-1])


def _build_database(property_triples, test_data, subdivisions,
                    supplemental_zwj):
  """Assemble an EmojiDatabase from parsed data.

  test_data is the output of _read_emoji_test_data, subdivisions a list
  of (code, name) and supplemental_zwj a map from sequence to (name, age,
  type) of zwj sequences that are valid but not recommended."""
  flags = set()
  recommended_tags = set()
  recommended_zwj = set()
  valid_zwj = set()
  groups = collections.OrderedDict()
  names = {}

  for seq, status, group, subgroup, name in test_data:
    names.setdefault(strip_emoji_vs(seq), name)
    if status not in ('fully-qualified', 'component'):
      # The other forms of a recommended zwj sequence lack some emoji
      # variation selectors, they are still well formed.
      if ZWJ in seq:
        valid_zwj.add(seq)
      continue
    groups.setdefault(group, collections.OrderedDict()).setdefault(
        subgroup, []).append((seq, name))
    if ZWJ in seq:
      recommended_zwj.add(seq)
    elif is_regional_tag_seq(seq):
      recommended_tags.add(seq)
    elif is_regional_indicator_seq(seq):
      flags.add(seq)

  for group, subgroups in groups.items():
    for subgroup in subgroups:
      subgroups[subgroup] = tuple(subgroups[subgroup])

  valid_tags = set()
  for code, name in subdivisions:
    seq = subdivision_to_tag_seq(code)
    valid_tags.add(seq)
    names.setdefault(seq, 'flag: %s' % name)

  for seq, (name, _, _) in supplemental_zwj.items():
    valid_zwj.add(seq)
    names.setdefault(strip_emoji_vs(seq), name)

  return EmojiDatabase(
      PropertyTable.from_assignments(property_triples),
      region_flags=flags,
      tag_sequences=SequenceTable(valid_tags, recommended_tags),
      zwj_sequences=SequenceTable(valid_zwj, recommended_zwj),
      groups=groups,
      names=names)


def load_database(data_dir=None):
  """Read the data files and return a new EmojiDatabase.

  Use get_database() to get the shared instance."""
  with open_emoji_data_file(_DATA_FILES['properties'], data_dir) as f:
    property_triples = _read_emoji_property_data(f)
  with open_emoji_data_file(_DATA_FILES['test'], data_dir) as f:
    test_data = _read_emoji_test_data(f)
  with open_emoji_data_file(_DATA_FILES['subdivisions'], data_dir) as f:
    subdivisions = _read_subdivision_data(f)
  supplemental_zwj = _read_emoji_sequence_data(
      _SUPPLEMENTAL_VALID_ZWJ_SEQUENCES.splitlines())

  db = _build_database(
      property_triples, test_data, subdivisions, supplemental_zwj)
  logger.info(
      'loaded emoji data: %d property ranges, %d flags, '
      '%d/%d tag sequences, %d/%d zwj sequences, %d groups',
      len(db.properties), len(db.region_flags),
      len(db.tag_sequences.recommended), len(db.tag_sequences.valid),
      len(db.zwj_sequences.recommended), len(db.zwj_sequences.valid),
      len(db.groups))
  return db


_database = None
_database_lock = threading.Lock()

def get_database():
  """Return the shared EmojiDatabase, loading it on first use.

  Concurrent first calls load the data once, every caller sees the same
  fully built instance."""
  global _database
  if _database is None:
    with _database_lock:
      if _database is None:
        _database = load_database()
  return _database


def load_data():
  """Loads the data files needed for the module.

  Could be used by processes that care about controlling when the data is
  loaded. Otherwise, data will be loaded the first time it's needed.
  """
  get_database()


def get_emoji_sequence_name(seq):
  """Return the emoji-test name of the sequence, or None.  Sequences with
  and without emoji variation selectors are both accepted."""
  return get_database().names.get(strip_emoji_vs(tuple(seq)))


def codepoint_name(cp, *args):
  """Returns the name of a codepoint.

  Uses the character name when there is one and the emoji name otherwise.
  Raises a ValueError exception if neither is known, unless an extra
  argument is given, in which case it will return that argument.
  """
  try:
    return unicodedata.name(chr(cp))
  except ValueError:
    emoji_name = get_emoji_sequence_name((cp,))
    if emoji_name:
      return emoji_name.upper()
    if args:
      return args[0]
    raise ValueError('no name for "%04x"' % cp)


def strip_emoji_vs(seq):
  """Return a version of this emoji sequence with emoji variation selectors
  stripped."""
  if EMOJI_VS in seq:
    return tuple([cp for cp in seq if cp != EMOJI_VS])
  return seq


def seq_to_string(seq):
  """Return a string representation of the codepoint sequence."""
  return '_'.join('%04x' % cp for cp in seq)


def string_to_seq(seq_str):
  """Return a codepoint sequence (tuple) given its string representation."""
  return tuple([int(s, 16) for s in seq_str.split('_')])


def text_to_seq(text):
  return tuple(ord(c) for c in text)


def seq_to_text(seq):
  return ''.join(chr(cp) for cp in seq)


_REGIONAL_INDICATOR_START = 0x1f1e6
_REGIONAL_INDICATOR_END = 0x1f1ff

def is_regional_indicator(cp):
  return _REGIONAL_INDICATOR_START <= cp <= _REGIONAL_INDICATOR_END


def is_regional_indicator_seq(cps):
  return len(cps) == 2 and all(is_regional_indicator(cp) for cp in cps)


def regional_indicator_seq_to_string(cps):
  """Return the region code of a flag, e.g. 'PT'."""
  if not is_regional_indicator_seq(cps):
    raise ValueError(
        '%s is not a regional indicator pair' % seq_to_string(cps))
  return ''.join(
      chr(cp - _REGIONAL_INDICATOR_START + ord('A')) for cp in cps)


_TAG_START = 0xe0020
_TAG_END = 0xe007a

def is_tag(cp):
  """True for the tag characters that spell a tag sequence body, not for
  the cancel tag."""
  return _TAG_START <= cp <= _TAG_END


def is_tag_block(cp):
  """True for any codepoint of the tag block, U+E0020..U+E007F."""
  return _TAG_START <= cp <= CANCEL_TAG


def is_regional_tag_seq(seq):
  return (len(seq) > 2 and seq[0] == BLACK_FLAG and seq[-1] == CANCEL_TAG
          and all(is_tag(cp) for cp in seq[1:-1]))


_FITZ_START = 0x1F3FB
_FITZ_END = 0x1F3FF

def is_skintone_modifier(cp):
  return _FITZ_START <= cp <= _FITZ_END


def is_keycap_base(cp):
  return cp in _KEYCAP_BASES
