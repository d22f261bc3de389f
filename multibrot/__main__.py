"""
Allow running the package directly: python -m multibrot
"""
import argparse

from .settings import set_verbose


def build_parser():
    parser = argparse.ArgumentParser(
        prog='multibrot',
        description='Interactive viewer for the z^power + c fractal family.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--width', type=int, default=None,
                        help='window width in pixels, including the 200px settings panel '
                             '(default from settings.json)')
    parser.add_argument('--height', type=int, default=None,
                        help='window height in pixels (default from settings.json)')
    parser.add_argument('--max-iterations', type=int, dest='max_iter', default=None,
                        metavar='N', help='initial iteration budget, clamped to 10..1000')
    parser.add_argument('--power', type=int, default=None,
                        help='initial exponent of the recurrence, clamped to 2..8')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print JIT and render timing diagnostics')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    # Deferred so --help works without opening a window
    from .app import run
    run(args.width, args.height, args.max_iter, args.power)


if __name__ == "__main__":
    main()
