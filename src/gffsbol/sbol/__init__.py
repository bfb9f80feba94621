# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage supplements :mod:`sbol2` for building
*Synthetic Biology Open Language* (SBOL 2) documents.

Objects are created with *SBOL compliant URIs*:
The URI of each object is derived from the namespace prefix set via
:func:`set_homespace()` and a display ID obtained from a human
readable label via :func:`display_id()`.
"""

__name__ = "gffsbol.sbol"
__author__ = "The gffsbol contributors"

from .terms import *
from .identity import *
from .document import *
