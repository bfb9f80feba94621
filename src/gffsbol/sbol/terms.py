# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Vocabulary URIs that are not already provided by :mod:`sbol2`.
"""

__name__ = "gffsbol.sbol"
__author__ = "The gffsbol contributors"
__all__ = [
    "RDFS_NS",
    "GFF3_NS",
    "SO_NS",
    "GO_NS",
    "SOURCE_ROLE",
    "SEE_ALSO",
    "GFF3_SOURCE",
]

RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
# Namespace of the custom annotations carrying GFF3 columns
GFF3_NS = "http://wiki.synbiohub.org/wiki/Terms/GFF3#"
SO_NS = "http://identifiers.org/so/"
GO_NS = "http://identifiers.org/go/"

SOURCE_ROLE = "http://sbols.org/v2#source"
SEE_ALSO = RDFS_NS + "seeAlso"
GFF3_SOURCE = GFF3_NS + "source"
