#!/usr/bin/env python
#
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

"""Tests for emoji_matcher.py."""

import threading
import unittest

from emojitools import emoji_data
from emojitools import emoji_grammar
from emojitools.emoji_matcher import EmojiMatcher

SLEEPING = '\U0001f634'
FLAG_PT = '\U0001f1f5\U0001f1f9'
KEYCAP_2 = '2\ufe0f\u20e3'
BED_MEDIUM = '\U0001f6cc\U0001f3fd'


class EmojiMatcherTest(unittest.TestCase):

    def setUp(self):
        self.matcher = EmojiMatcher(emoji_grammar.REGEX_CONFIG)

    def test_match(self):
        m = self.matcher.match(SLEEPING + ' zzz')
        self.assertEqual(SLEEPING, m.group())
        self.assertEqual((0, 1), m.span())
        self.assertEqual(0, m.start())
        self.assertEqual(1, m.end())
        self.assertEqual((0x1f634,), m.codepoints())
        self.assertEqual(emoji_grammar.EMOJI_SINGLETON, m.production)
        self.assertIs(self.matcher, m.matcher)
        self.assertIsNone(self.matcher.match('zzz ' + SLEEPING))

    def test_match_pos(self):
        m = self.matcher.match('zzz ' + SLEEPING, 4)
        self.assertEqual((4, 5), m.span())
        self.assertIsNone(self.matcher.match(SLEEPING, 1))
        self.assertIsNone(self.matcher.match(SLEEPING, 10))
        self.assertEqual(SLEEPING, self.matcher.match(SLEEPING, -3).group())

    def test_endpos_truncates_sequences(self):
        self.assertEqual(KEYCAP_2, self.matcher.match(KEYCAP_2).group())
        self.assertIsNone(self.matcher.match(KEYCAP_2, 0, 2))
        self.assertIsNone(self.matcher.match(FLAG_PT, 0, 1))
        m = self.matcher.match(BED_MEDIUM, 0, 1)
        self.assertEqual('\U0001f6cc', m.group())

    def test_fullmatch(self):
        self.assertEqual(FLAG_PT, self.matcher.fullmatch(FLAG_PT).group())
        self.assertIsNone(self.matcher.fullmatch(FLAG_PT + ' '))
        self.assertIsNone(self.matcher.fullmatch(SLEEPING + SLEEPING))
        self.assertIsNone(self.matcher.fullmatch(''))

    def test_search(self):
        m = self.matcher.search('abc ' + FLAG_PT + ' ' + SLEEPING)
        self.assertEqual((4, 6), m.span())
        m = self.matcher.search('abc ' + FLAG_PT + ' ' + SLEEPING, 5)
        self.assertEqual(SLEEPING, m.group())
        self.assertIsNone(self.matcher.search('abc'))
        self.assertIsNone(self.matcher.search(''))

    def test_finditer(self):
        text = 'a' + SLEEPING + KEYCAP_2 + 'b' + BED_MEDIUM
        spans = [m.span() for m in self.matcher.finditer(text)]
        self.assertEqual([(1, 2), (2, 5), (6, 8)], spans)
        spans = [m.span() for m in self.matcher.finditer(text, 2, 6)]
        self.assertEqual([(2, 5)], spans)

    def test_finditer_restarts(self):
        text = SLEEPING + ' ' + FLAG_PT
        first = [m.span() for m in self.matcher.finditer(text)]
        second = [m.span() for m in self.matcher.finditer(text)]
        self.assertEqual(first, second)
        self.assertEqual([(0, 1), (2, 4)], first)

    def test_finditer_is_lazy(self):
        it = self.matcher.finditer(SLEEPING + SLEEPING)
        self.assertEqual((0, 1), next(it).span())
        self.assertEqual((1, 2), next(it).span())
        with self.assertRaises(StopIteration):
            next(it)

    def test_findall(self):
        self.assertEqual(
            [SLEEPING, FLAG_PT],
            self.matcher.findall('x' + SLEEPING + 'y' + FLAG_PT + 'z'))
        self.assertEqual([], self.matcher.findall('no emoji here'))
        self.assertEqual([], self.matcher.findall(''))

    def test_matches_cover_text_without_overlap(self):
        text = ('I ❤\ufe0f ' + FLAG_PT + FLAG_PT + '\U0001f1f5 ' +
                BED_MEDIUM + KEYCAP_2 + '2' + SLEEPING + '\ufe0e')
        last = 0
        for m in self.matcher.finditer(text):
            self.assertGreaterEqual(m.start(), last)
            self.assertGreater(m.end(), m.start())
            self.assertEqual(text[m.start():m.end()], m.group())
            last = m.end()

    def test_sub(self):
        text = 'a' + SLEEPING + 'b' + FLAG_PT + 'c'
        self.assertEqual('a_b_c', self.matcher.sub('_', text))
        self.assertEqual('a_b' + FLAG_PT + 'c', self.matcher.sub('_', text, 1))
        self.assertEqual(
            'a<1f634>b<1f1f5_1f1f9>c',
            self.matcher.sub(
                lambda m: '<%s>' % emoji_data.seq_to_string(
                    m.codepoints()), text))
        self.assertEqual('plain', self.matcher.sub('_', 'plain'))

    def test_subn(self):
        text = SLEEPING + SLEEPING + 'x' + SLEEPING
        self.assertEqual(('__x_', 3), self.matcher.subn('_', text))
        self.assertEqual(('_' + SLEEPING + 'x' + SLEEPING, 1),
                         self.matcher.subn('_', text, 1))
        self.assertEqual(('x', 0), self.matcher.subn('_', 'x'))

    def test_type_error(self):
        for value in (b'\xf0\x9f\x98\xb4', None, 42, ['a']):
            with self.assertRaises(TypeError):
                self.matcher.match(value)
            with self.assertRaises(TypeError):
                self.matcher.findall(value)
            with self.assertRaises(TypeError):
                self.matcher.sub('_', value)

    def test_repr(self):
        self.assertEqual('EmojiMatcher(REGEX)', repr(self.matcher))
        m = self.matcher.match(SLEEPING)
        self.assertEqual(
            "<EmojiMatch span=(0, 1), match='%s', matcher=REGEX>" % SLEEPING,
            repr(m))

    def test_deterministic(self):
        text = 'I ❤\ufe0f ' + FLAG_PT + ', ▶ ▶\ufe0f'
        other = EmojiMatcher(emoji_grammar.REGEX_CONFIG)
        self.assertEqual(self.matcher.findall(text), other.findall(text))
        self.assertEqual(self.matcher.findall(text), self.matcher.findall(text))


class LazyCompileTest(unittest.TestCase):

    def test_loader_called_once(self):
        calls = []

        def loader():
            calls.append(1)
            return emoji_data.get_database()

        matcher = EmojiMatcher(emoji_grammar.BASIC_CONFIG, loader)
        self.assertEqual([], calls)
        self.assertEqual(['\U0001f634'], matcher.findall('a\U0001f634'))
        self.assertEqual(['▶'], matcher.findall('▶'))
        self.assertEqual(1, len(calls))

    def test_concurrent_first_use(self):
        calls = []

        def loader():
            calls.append(1)
            return emoji_data.get_database()

        matcher = EmojiMatcher(emoji_grammar.REGEX_CONFIG, loader)
        results = []

        def scan():
            results.append(matcher.findall(SLEEPING + FLAG_PT))

        threads = [threading.Thread(target=scan) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(1, len(calls))
        self.assertEqual([[SLEEPING, FLAG_PT]] * 8, results)

    def test_grammar_is_cached(self):
        matcher = EmojiMatcher(emoji_grammar.TEXT_CONFIG)
        self.assertIs(matcher.grammar(), matcher.grammar())


if __name__ == '__main__':
    unittest.main()
