"""Command-line interface for autofd."""

import argparse
import logging
import sys

from autofd.errors import AutofdError
from autofd.expr import Order
from autofd.generate import FunctionSpec, derivative

logger = logging.getLogger(__name__)

_EPILOG = """\
examples:
  $ autofd -pkg mypkg.funcs -fct f1
  def deriv_f1(x: float) -> float:
      v = dual.mul(dual.Number(real=x, emag=1), dual.Number(real=x, emag=1))
      return v.emag

  $ autofd -pkg mypkg.funcs -fct f1 -der dx_f1 -d2
  def dx_f1(x: float) -> tuple[float, float]:
      v = hyperdual.mul(hyperdual.Number(real=x, e1mag=1, e2mag=1), hyperdual.Number(real=x, e1mag=1, e2mag=1))
      return v.e1mag, v.e1e2mag

  $ autofd -pkg mypkg.funcs -fct T1.f
"""


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autofd",
        description="Generate the derivative of a function or method.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-pkg",
        "--pkg",
        required=True,
        help="import path of the module holding the function or method definition",
    )
    parser.add_argument(
        "-fct",
        "--fct",
        required=True,
        help="name of the function, or Type.method",
    )
    parser.add_argument(
        "-der",
        "--der",
        default="",
        help="name of the derivative to generate",
    )
    parser.add_argument(
        "-d2",
        "--d2",
        action="store_true",
        help="generate both first and second derivatives",
    )
    parser.add_argument(
        "--imports",
        action="store_true",
        help="precede the definition with the import of the number system",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log each generation stage to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run autofd.

    Returns
    -------
    int
        Exit code (0 for success, 1 if the derivative could not be generated).
    """
    args = create_parser().parse_args(argv)
    setup_logging(args.verbose)

    spec = FunctionSpec(
        path=args.pkg,
        name=args.fct,
        deriv=args.der,
        order=Order.SECOND if args.d2 else Order.FIRST,
    )

    try:
        derivative(sys.stdout, spec, imports=args.imports)
    except AutofdError as exc:
        notes = "".join(f"\n  {x}" for x in getattr(exc, "__notes__", ()))
        logger.error(f"could not generate derivative of {spec.qualname}: {exc}{notes}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
