"""
Command-line entry point for the town generator
"""
import argparse
import json
import logging
import sys

from .model import Model
from .snapshot import CitySnapshot
from .errors import ExhaustedRetries
from .math_utils import gate

logger = logging.getLogger(__name__)

MIN_SIZE = 6
MAX_SIZE = 40


def build_parser():
    parser = argparse.ArgumentParser(description='Medieval Fantasy City Generator')
    parser.add_argument('-s', '--size', type=int, default=15,
                        help='City size (6=Small Town, 10=Large Town, 15=Small City, 24=Large City, 40=Metropolis)')
    parser.add_argument('--seed', type=int, default=-1,
                        help='Random seed (-1 for random)')
    parser.add_argument('--indent', type=int, default=2,
                        help='JSON indentation (default: 2)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every generation phase')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    size = gate(args.size, MIN_SIZE, MAX_SIZE)
    if size != args.size:
        logger.warning("Size %d is out of range, using %d", args.size, size)

    logger.info("Generating city (size=%d, seed=%s)", size, args.seed if args.seed != -1 else 'random')

    try:
        model = Model(size, args.seed)
    except ExhaustedRetries as e:
        logger.error("%s", e)
        return 1

    snapshot = CitySnapshot.from_model(model)
    logger.info("%s generated with seed %d", snapshot.size_class, snapshot.seed)
    logger.info("  Patches: %d", len(model.patches))
    logger.info("  Inner patches: %d", len(model.inner))
    logger.info("  Gates: %d", len(model.gates))
    logger.info("  Streets: %d", len(model.streets))
    logger.info("  Roads: %d", len(model.roads))

    print(json.dumps(snapshot.to_dict(), indent=args.indent))
    return 0


if __name__ == '__main__':
    sys.exit(main())
