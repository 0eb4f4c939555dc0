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

"""Emoji detection, classification and listing.

The matchers, from loosest to strictest:

  ANY          any single emoji related codepoint, partials included
  TEXT         emoji in text presentation
  BASIC        single emoji codepoints in emoji presentation, no sequences
  REGEX        emoji and emoji sequences recommended for general interchange
  REGEX_VALID  like REGEX, but also valid sequences that are not recommended

  >>> REGEX.findall('I ❤️ 🇵🇹, ▶ ▶️')
  ['❤️', '🇵🇹', '▶️']

properties() returns the emoji properties of a codepoint and list_emoji()
the emoji-test group/subgroup tree.
"""

import collections

from emojitools import emoji_data
from emojitools import emoji_grammar
from emojitools.emoji_matcher import EmojiMatcher

ANY = EmojiMatcher(emoji_grammar.ANY_CONFIG)
TEXT = EmojiMatcher(emoji_grammar.TEXT_CONFIG)
BASIC = EmojiMatcher(emoji_grammar.BASIC_CONFIG)
REGEX = EmojiMatcher(emoji_grammar.REGEX_CONFIG)
REGEX_VALID = EmojiMatcher(emoji_grammar.REGEX_VALID_CONFIG)

MATCHERS = collections.OrderedDict(
    (m.name, m) for m in (ANY, TEXT, BASIC, REGEX, REGEX_VALID))

EmojiEntry = collections.namedtuple('EmojiEntry', ['emoji', 'name'])


class NotFoundError(LookupError):
  """Raised by list_emoji for an unknown group or subgroup."""


def properties(text):
  """Return the tuple of emoji properties of the first codepoint of text,
  in emoji-data.txt declaration order, or None if it has none."""
  if not text:
    return None
  props = emoji_data.get_database().properties.get(ord(text[0]))
  return props or None


def name(text):
  """Return the emoji-test name of the emoji (sequence) text, or None."""
  return emoji_data.get_emoji_sequence_name(emoji_data.text_to_seq(text))


def _entries(items):
  return tuple(
      EmojiEntry(emoji_data.seq_to_text(seq), seq_name)
      for seq, seq_name in items)


def _subgroup_map(subgroups):
  return collections.OrderedDict(
      (subgroup, _entries(items)) for subgroup, items in subgroups.items())


def list_emoji(group=None, subgroup=None):
  """Return emoji by group and subgroup, in emoji-test order.

  With no arguments, returns an OrderedDict from group to an OrderedDict
  from subgroup to a tuple of EmojiEntry.  With a group, returns the
  OrderedDict for that group, with a group and subgroup, the tuple.
  Raises NotFoundError for an unknown group or subgroup.
  """
  groups = emoji_data.get_database().groups
  if group is None:
    if subgroup is not None:
      raise ValueError('subgroup "%s" given without a group' % subgroup)
    return collections.OrderedDict(
        (g, _subgroup_map(subgroups)) for g, subgroups in groups.items())

  if group not in groups:
    raise NotFoundError('unknown emoji group "%s"' % group)
  if subgroup is None:
    return _subgroup_map(groups[group])

  if subgroup not in groups[group]:
    raise NotFoundError(
        'unknown subgroup "%s" in emoji group "%s"' % (subgroup, group))
  return _entries(groups[group][subgroup])
