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

"""Scans text with a compiled emoji grammar.

EmojiMatcher has the scanning methods of a compiled re pattern: match,
fullmatch, search, finditer, findall, sub and subn.  Scanning is
leftmost-longest: at each position the grammar is tried, and where nothing
matches the scan moves on by one codepoint.  Matches never overlap.

The grammar is compiled the first time a matcher is used.
"""

import logging
import threading

from emojitools import emoji_data
from emojitools import emoji_grammar

logger = logging.getLogger('emojitools.emoji_matcher')


class EmojiMatch(object):
  """A match of an EmojiMatcher in a string, like re.Match."""

  __slots__ = ('matcher', 'string', 'production', '_start', '_end')

  def __init__(self, matcher, string, start, end, production):
    self.matcher = matcher
    self.string = string
    self.production = production
    self._start = start
    self._end = end

  def group(self):
    return self.string[self._start:self._end]

  def start(self):
    return self._start

  def end(self):
    return self._end

  def span(self):
    return self._start, self._end

  def codepoints(self):
    return emoji_data.text_to_seq(self.group())

  def __repr__(self):
    return '<EmojiMatch span=%r, match=%r, matcher=%s>' % (
        self.span(), self.group(), self.matcher.name)


class EmojiMatcher(object):
  """Applies one matcher variant (see emoji_grammar.MatcherConfig) to text.

  database_loader is called without arguments to get the EmojiDatabase
  when the grammar is first needed."""

  def __init__(self, config, database_loader=emoji_data.get_database):
    self.config = config
    self._database_loader = database_loader
    self._grammar = None
    self._lock = threading.Lock()

  @property
  def name(self):
    return self.config.name

  def grammar(self):
    """Return the CompiledGrammar, compiling it on first use."""
    if self._grammar is None:
      with self._lock:
        if self._grammar is None:
          self._grammar = emoji_grammar.compile_grammar(
              self.config, self._database_loader())
    return self._grammar

  def _prepare(self, text, pos, endpos):
    if not isinstance(text, str):
      raise TypeError(
          'expected a str, got %s' % type(text).__name__)
    size = len(text)
    if endpos is None or endpos > size:
      endpos = size
    pos = min(max(pos, 0), endpos)
    cps = emoji_data.text_to_seq(text[:endpos])
    return cps, pos

  def _match_at(self, grammar, text, cps, pos):
    result = grammar.match_at(cps, pos)
    if result is None:
      return None
    end, production = result
    return EmojiMatch(self, text, pos, end, production)

  def match(self, text, pos=0, endpos=None):
    """Return the match starting exactly at pos, or None."""
    cps, pos = self._prepare(text, pos, endpos)
    if pos >= len(cps):
      return None
    return self._match_at(self.grammar(), text, cps, pos)

  def fullmatch(self, text):
    """Return the match if a single match covers all of text, or None."""
    m = self.match(text)
    if m is not None and m.end() == len(text):
      return m
    return None

  def finditer(self, text, pos=0, endpos=None):
    """Generate the non-overlapping matches in text, left to right.

    Each call starts a new scan."""
    cps, pos = self._prepare(text, pos, endpos)
    grammar = self.grammar()
    size = len(cps)
    while pos < size:
      m = self._match_at(grammar, text, cps, pos)
      if m is None:
        pos += 1
        continue
      yield m
      pos = m.end()

  def search(self, text, pos=0, endpos=None):
    """Return the first match at or after pos, or None."""
    for m in self.finditer(text, pos, endpos):
      return m
    return None

  def findall(self, text, pos=0, endpos=None):
    """Return the list of matched strings."""
    return [m.group() for m in self.finditer(text, pos, endpos)]

  def subn(self, repl, text, count=0):
    """Like sub, but return (new_text, number_of_substitutions)."""
    if callable(repl):
      repl_fn = repl
    else:
      repl_fn = lambda m: repl
    parts = []
    last = 0
    n = 0
    for m in self.finditer(text):
      if count and n >= count:
        break
      parts.append(text[last:m.start()])
      parts.append(repl_fn(m))
      last = m.end()
      n += 1
    parts.append(text[last:])
    return ''.join(parts), n

  def sub(self, repl, text, count=0):
    """Replace matches with repl, a string or a function called with the
    EmojiMatch.  At most count matches are replaced if count is not 0."""
    return self.subn(repl, text, count)[0]

  def __repr__(self):
    return 'EmojiMatcher(%s)' % self.name
