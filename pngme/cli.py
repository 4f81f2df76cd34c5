"""Command line front end: pngme encode|decode|remove|print"""

import argparse
import logging
import sys

from . import __version__
from . import commands
from .pngexceptions import PngException

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s - [%(levelname)s] - %(message)s', stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pngme',
        description='Encode and decode messages into a PNG',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Hide a message in a ruSt chunk
  pngme encode image.png ruSt "This is a secret message"

  # Read it back
  pngme decode image.png ruSt

  # Delete it
  pngme remove image.png ruSt

  # List the chunks of an image
  pngme print image.png
''')
    parser.add_argument('--version', action='version', version='%(prog)s {}'.format(__version__))
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Verbose output, repeat for debug output')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to run')

    encode_parser = subparsers.add_parser('encode', help='Hide a message in a chunk')
    encode_parser.add_argument('file_path', help='PNG file (or http(s) url) to read')
    encode_parser.add_argument('chunk_type', help='Four letters chunk type, e.g. ruSt')
    encode_parser.add_argument('message', help='Message to hide')
    encode_parser.add_argument('output_file', nargs='?', help='Where to write the result (default: file_path)')

    decode_parser = subparsers.add_parser('decode', help='Print the message hidden in a chunk')
    decode_parser.add_argument('file_path', help='PNG file (or http(s) url) to read')
    decode_parser.add_argument('chunk_type', help='Four letters chunk type')

    remove_parser = subparsers.add_parser('remove', help='Remove the first chunk of a type')
    remove_parser.add_argument('file_path', help='PNG file to edit in place')
    remove_parser.add_argument('chunk_type', help='Four letters chunk type')

    print_parser = subparsers.add_parser('print', help='Print the chunks of a PNG')
    print_parser.add_argument('file_path', help='PNG file (or http(s) url) to read')

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == 'encode':
            chunk = commands.encode(args.file_path, args.chunk_type, args.message, args.output_file)
            print("Encoded {} bytes in a {} chunk".format(chunk.length, chunk.type))
        elif args.command == 'decode':
            message = commands.decode(args.file_path, args.chunk_type)
            if message is None:
                print("No matching chunk of type {}".format(args.chunk_type))
            else:
                print(message)
        elif args.command == 'remove':
            chunk = commands.remove(args.file_path, args.chunk_type)
            print("Removed {} chunk ({} bytes)".format(chunk.type, chunk.length))
        elif args.command == 'print':
            print(commands.print_chunks(args.file_path))
    except PngException as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
