# Copyright 2016 Google Inc. All Rights Reserved.
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


"""Provides the command-line utility `emojiscan`.

`emojiscan scan` prints the emoji one of the matchers finds in text given
as arguments, in a file, or on stdin, one match per line as start and end
offsets (in codepoints), the emoji and its codepoints.  `emojiscan props`
prints the emoji properties of a codepoint and `emojiscan list` browses
the emoji groups and subgroups.
"""

import argparse
import logging
import sys

from emojitools import emoji, emoji_data, tool_utils

logger = logging.getLogger('emojitools.emojiscan')


def _read_input(args):
    if args.hex:
        return ''.join(
            emoji_data.seq_to_text(tool_utils.parse_codepoint_seq(s))
            for s in args.text)
    if args.file:
        return tool_utils.read_text(args.file)
    if args.text:
        return ' '.join(args.text)
    return sys.stdin.read()


def _sequence_name(text):
    """Name of an emoji sequence, built from its codepoint names if it has
    no name of its own."""
    seq_name = emoji.name(text)
    if seq_name:
        return seq_name
    return ' + '.join(
        emoji_data.codepoint_name(ord(c), '<unnamed>').lower() for c in text)


def _scan(args):
    text = _read_input(args)
    matcher = emoji.MATCHERS[args.matcher]
    matches = list(matcher.finditer(text))
    logger.info('%s found %d matches in %d codepoints',
                matcher.name, len(matches), len(text))
    if args.count:
        print(len(matches))
        return 0
    for m in matches:
        fields = [str(m.start()), str(m.end()), m.group(),
                  emoji_data.seq_to_string(m.codepoints())]
        if args.names:
            fields.append(_sequence_name(m.group()))
        print('\t'.join(fields))
    return 0


def _props(args):
    if args.hex:
        text = emoji_data.seq_to_text(
            tool_utils.parse_codepoint_seq(args.text))
    else:
        text = args.text
    if not text:
        print('error: no text', file=sys.stderr)
        return 1
    props = emoji.properties(text)
    print('U+%04X\t%s' % (ord(text[0]), ', '.join(props) if props else 'none'))
    return 0


def _list(args):
    try:
        result = emoji.list_emoji(args.group, args.subgroup)
    except emoji.NotFoundError as e:
        print('error: %s' % e.args[0], file=sys.stderr)
        return 1
    if args.subgroup:
        for entry in result:
            print('%s\t%s' % (entry.emoji, entry.name))
    elif args.group:
        for subgroup, entries in result.items():
            print('%s\t%d' % (subgroup, len(entries)))
    else:
        for group, subgroups in result.items():
            print('%s\t%d' % (group, sum(len(e) for e in subgroups.values())))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Find and classify emoji in text.')
    parser.add_argument('--loglevel', default='WARNING',
                        help='log level name or number (default WARNING)')
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    scan = subparsers.add_parser('scan', help='list the emoji in text')
    scan.add_argument('-m', '--matcher', default='REGEX',
                      choices=list(emoji.MATCHERS),
                      help='matcher to scan with (defaults to "REGEX")')
    scan.add_argument('-f', '--file', help='read text from this utf-8 file')
    scan.add_argument('-x', '--hex', action='store_true',
                      help='each TEXT argument is a sequence of hex '
                      'codepoints, like "1f469_200d_1f4bb"')
    scan.add_argument('-n', '--names', action='store_true',
                      help='also print the name of each match')
    scan.add_argument('-c', '--count', action='store_true',
                      help='only print the number of matches')
    scan.add_argument('text', nargs='*',
                      help='text to scan, stdin is read if there is none')
    scan.set_defaults(func=_scan)

    props = subparsers.add_parser(
        'props', help='print the emoji properties of a codepoint')
    props.add_argument('-x', '--hex', action='store_true',
                       help='TEXT is a hex codepoint')
    props.add_argument('text', help='character to classify')
    props.set_defaults(func=_props)

    list_cmd = subparsers.add_parser(
        'list', help='list emoji groups, subgroups, or the emoji in one')
    list_cmd.add_argument('group', nargs='?')
    list_cmd.add_argument('subgroup', nargs='?')
    list_cmd.set_defaults(func=_list)

    args = parser.parse_args(argv)
    if not tool_utils.setup_logging(args.loglevel):
        return 2
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
