# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *gffsbol*, a converter from
annotated genomes in *GFF3* format into *SBOL* documents.

The conversion itself is found in :mod:`gffsbol.gff`, the SBOL object
model in :mod:`gffsbol.sbol`.
"""

__version__ = "0.1.0"
__name__ = "gffsbol"
__author__ = "The gffsbol contributors"

from .file import *
