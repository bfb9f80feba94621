# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for converting annotated genomes in a
*GFF3*-like format into SBOL documents.

It provides the :class:`GFFFile` class, a low-level line-based
interface to the format, and the high-level functions
:func:`get_document()` and :func:`convert()`.

The input consists of tab separated feature records and ``#``
comments, followed by a single ``>`` header line and the raw sequence.
Comments of the form
``# <product> created from <source> <YYMMDD> by <agent> (<description>)``
are converted into *PROV-O* activities.

.. note:: Attribute values containing escaped ``;`` or ``=``
   characters are not supported.
"""

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"

from .error import *
from .file import *
from .roles import *
from .provenance import *
from .convert import *
