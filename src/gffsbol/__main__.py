# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Command line interface: ``gffsbol <file>`` prints the SBOL document
converted from the given annotated genome to standard output.
"""

__author__ = "The gffsbol contributors"
__all__ = ["main"]

import argparse
import logging
import sys
from gffsbol import __version__
from gffsbol.gff import convert


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    parser = argparse.ArgumentParser(
        prog="gffsbol",
        description="Convert an annotated genome (GFF3 with appended "
                    "sequence) into an SBOL document."
    )
    parser.add_argument("file", help="The GFF3 file to be converted.")
    parser.add_argument("--version", "-V", action="version", version=__version__)
    args = parser.parse_args(argv)

    xml = convert(args.file)
    sys.stdout.write(xml)
    if not xml.endswith("\n"):
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()
