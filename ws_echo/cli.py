#!/usr/bin/env python3
"""Command line entry point: ws-echo [-i PORT_IN] [-o PORT_OUT]."""
import argparse
import asyncio
import logging

from ws_echo.config import DEFAULT_HOST, DEFAULT_PORT_IN, DEFAULT_PORT_OUT, Config
from ws_echo.server import run

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

EXAMPLES = '''examples:
  %(prog)s --port-in 8080 --port-out 8081   Forward messages from 8080 to 8081
  %(prog)s -i 3000 -o 3000                  Echo messages on the same port 3000
'''


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ws-echo',
        description='Forward WebSocket messages from an input port to an output port',
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-i', '--port-in', type=int, default=DEFAULT_PORT_IN,
                        help=f'Input port to receive WebSocket messages (default: {DEFAULT_PORT_IN})')
    parser.add_argument('-o', '--port-out', type=int, default=DEFAULT_PORT_OUT,
                        help=f'Output port to forward WebSocket messages (default: {DEFAULT_PORT_OUT})')
    parser.add_argument('--host', default=DEFAULT_HOST,
                        help=f'Interface to listen on (default: {DEFAULT_HOST})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging, including connection and handshake details')
    return parser


def parse_args(argv=None) -> Config:
    args = build_parser().parse_args(argv)
    return Config(port_in=args.port_in, port_out=args.port_out,
                  host=args.host, verbose=args.verbose)


def configure_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    if not verbose:
        logging.getLogger('websockets').setLevel(logging.WARNING)


def main(argv=None) -> int:
    config = parse_args(argv)
    configure_logging(config.verbose)
    try:
        return asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info('Shutting down ws-echo...')
        return 0


if __name__ == '__main__':
    raise SystemExit(main())
