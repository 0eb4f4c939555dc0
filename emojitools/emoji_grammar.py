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

"""Compiles the UTS #51 emoji sequence grammar against an EmojiDatabase.

A matcher variant is described by a MatcherConfig: the productions it
enables and the policy ('recommended' or 'valid') that selects which
sequence tables gate the tag and zwj productions.  CompiledGrammar
evaluates the enabled productions at a position, highest priority first,
and reports the end of the first one that matches.

Productions, in priority order:
  zwj_sequence       a listed zwj sequence, longest listed one wins
  tag_sequence       a listed U+1F3F4 tag sequence, longest listed one wins
  flag_sequence      a listed pair of regional indicators
  keycap_sequence    [0-9#*] U+FE0F U+20E3
  modifier_sequence  Emoji_Modifier_Base followed by Emoji_Modifier
  emoji_singleton    emoji presentation codepoint, or any emoji codepoint
                     followed by U+FE0F
  basic_singleton    any emoji codepoint, optionally followed by U+FE0F
  text_singleton     text presentation codepoint not followed by U+FE0F,
                     or any emoji codepoint followed by U+FE0E
  any_codepoint      one emoji related codepoint, no sequence at all

The singletons never match Emoji_Component codepoints and never match a
codepoint followed by the variation selector of the other presentation.
"""

import collections
import logging

from emojitools import emoji_data
from emojitools.emoji_data import (
    BLACK_FLAG, CANCEL_TAG, EMOJI_VS, KEYCAP, TEXT_VS, ZWJ)

logger = logging.getLogger('emojitools.emoji_grammar')

ZWJ_SEQUENCE = 'zwj_sequence'
TAG_SEQUENCE = 'tag_sequence'
FLAG_SEQUENCE = 'flag_sequence'
KEYCAP_SEQUENCE = 'keycap_sequence'
MODIFIER_SEQUENCE = 'modifier_sequence'
EMOJI_SINGLETON = 'emoji_singleton'
BASIC_SINGLETON = 'basic_singleton'
TEXT_SINGLETON = 'text_singleton'
ANY_CODEPOINT = 'any_codepoint'

PRODUCTION_PRIORITY = (
    ZWJ_SEQUENCE,
    TAG_SEQUENCE,
    FLAG_SEQUENCE,
    KEYCAP_SEQUENCE,
    MODIFIER_SEQUENCE,
    EMOJI_SINGLETON,
    BASIC_SINGLETON,
    TEXT_SINGLETON,
    ANY_CODEPOINT)

MatcherConfig = collections.namedtuple(
    'MatcherConfig', ['name', 'productions', 'policy'])

_FULL_GRAMMAR = (
    ZWJ_SEQUENCE, TAG_SEQUENCE, FLAG_SEQUENCE, KEYCAP_SEQUENCE,
    MODIFIER_SEQUENCE, EMOJI_SINGLETON)

ANY_CONFIG = MatcherConfig('ANY', (ANY_CODEPOINT,), emoji_data.RECOMMENDED)
TEXT_CONFIG = MatcherConfig('TEXT', (TEXT_SINGLETON,), emoji_data.RECOMMENDED)
BASIC_CONFIG = MatcherConfig(
    'BASIC', (BASIC_SINGLETON,), emoji_data.RECOMMENDED)
REGEX_CONFIG = MatcherConfig('REGEX', _FULL_GRAMMAR, emoji_data.RECOMMENDED)
REGEX_VALID_CONFIG = MatcherConfig(
    'REGEX_VALID', _FULL_GRAMMAR, emoji_data.VALID)

CONFIGS = collections.OrderedDict(
    (config.name, config) for config in (
        ANY_CONFIG, TEXT_CONFIG, BASIC_CONFIG, REGEX_CONFIG,
        REGEX_VALID_CONFIG))


def _is_joining_component(cp):
  """Components that only ever occur inside a sequence."""
  return cp in (ZWJ, KEYCAP, EMOJI_VS) or emoji_data.is_tag_block(cp)


class SequenceTrie(object):
  """Codepoint trie over a set of sequences, for longest listed prefix
  lookups."""

  _TERMINAL = -1

  def __init__(self, sequences):
    self._root = {}
    self._size = 0
    for seq in sequences:
      node = self._root
      for cp in seq:
        node = node.setdefault(cp, {})
      if self._TERMINAL not in node:
        node[self._TERMINAL] = True
        self._size += 1

  def longest_match(self, cps, pos):
    """Return the end of the longest sequence in the trie that starts at pos
    in cps, or None."""
    node = self._root
    result = None
    for i in range(pos, len(cps)):
      node = node.get(cps[i])
      if node is None:
        break
      if self._TERMINAL in node:
        result = i + 1
    return result

  def __len__(self):
    return self._size


class CompiledGrammar(object):
  """One matcher variant compiled against a database.  Immutable, so one
  instance can be shared between threads."""

  def __init__(self, config, database):
    unknown = set(config.productions) - set(PRODUCTION_PRIORITY)
    if unknown:
      raise ValueError('unknown production%s %s in matcher %s' % (
          '' if len(unknown) == 1 else 's', ', '.join(sorted(unknown)),
          config.name))
    self.config = config
    self._properties = database.properties
    self._region_flags = database.region_flags
    # Raises for an unknown policy even if no production is gated by it.
    zwj_sequences = database.zwj_sequences.sequences(config.policy)
    tag_sequences = database.tag_sequences.sequences(config.policy)
    self._zwj_trie = SequenceTrie(
        zwj_sequences if ZWJ_SEQUENCE in config.productions else ())
    self._tag_trie = SequenceTrie(
        tag_sequences if TAG_SEQUENCE in config.productions else ())
    self._productions = tuple(
        (production, getattr(self, '_' + production))
        for production in PRODUCTION_PRIORITY
        if production in config.productions)

  @property
  def productions(self):
    return tuple(production for production, _ in self._productions)

  def match_at(self, cps, pos):
    """Match at exactly pos in the codepoint sequence cps.

    Returns (end, production) for the first production that matches, or
    None.  Productions that fail leave nothing consumed, so a shorter one
    is tried at the same position."""
    for production, match_fn in self._productions:
      end = match_fn(cps, pos)
      if end is not None:
        return end, production
    return None

  def _has(self, cp, prop):
    return prop in self._properties.get(cp)

  def _zwj_sequence(self, cps, pos):
    return self._zwj_trie.longest_match(cps, pos)

  def _tag_sequence(self, cps, pos):
    if cps[pos] != BLACK_FLAG:
      return None
    return self._tag_trie.longest_match(cps, pos)

  def _flag_sequence(self, cps, pos):
    if tuple(cps[pos:pos + 2]) in self._region_flags:
      return pos + 2
    return None

  def _keycap_sequence(self, cps, pos):
    if (emoji_data.is_keycap_base(cps[pos]) and
        tuple(cps[pos + 1:pos + 3]) == (EMOJI_VS, KEYCAP)):
      return pos + 3
    return None

  def _modifier_sequence(self, cps, pos):
    if (pos + 1 < len(cps) and
        self._has(cps[pos], 'Emoji_Modifier_Base') and
        self._has(cps[pos + 1], 'Emoji_Modifier')):
      return pos + 2
    return None

  def _singleton(self, cps, pos):
    """Return the properties of an emoji codepoint at pos and the codepoint
    following it (None at the end), or (None, None) for codepoints no
    singleton accepts."""
    props = self._properties.get(cps[pos])
    if 'Emoji' not in props or 'Emoji_Component' in props:
      return None, None
    follower = cps[pos + 1] if pos + 1 < len(cps) else None
    return props, follower

  def _emoji_singleton(self, cps, pos):
    props, follower = self._singleton(cps, pos)
    if props is None or follower == TEXT_VS:
      return None
    if follower == EMOJI_VS:
      return pos + 2
    if 'Emoji_Presentation' in props:
      return pos + 1
    return None

  def _basic_singleton(self, cps, pos):
    props, follower = self._singleton(cps, pos)
    if props is None or follower == TEXT_VS:
      return None
    if follower == EMOJI_VS:
      return pos + 2
    return pos + 1

  def _text_singleton(self, cps, pos):
    props, follower = self._singleton(cps, pos)
    if props is None or follower == EMOJI_VS:
      return None
    if follower == TEXT_VS:
      return pos + 2
    if 'Emoji_Presentation' in props:
      return None
    return pos + 1

  def _any_codepoint(self, cps, pos):
    cp = cps[pos]
    props = self._properties.get(cp)
    if 'Emoji' in props or emoji_data.is_regional_indicator(cp):
      return pos + 1
    if 'Emoji_Component' in props and not _is_joining_component(cp):
      return pos + 1
    return None


def compile_grammar(config, database=None):
  """Return a CompiledGrammar for config, against the shared database
  unless another one is given."""
  if database is None:
    database = emoji_data.get_database()
  grammar = CompiledGrammar(config, database)
  logger.debug(
      'compiled %s: %s (%s), %d zwj and %d tag sequences', config.name,
      ', '.join(grammar.productions), config.policy, len(grammar._zwj_trie),
      len(grammar._tag_trie))
  return grammar
