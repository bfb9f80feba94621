# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Helpers around :class:`sbol2.Document` for custom annotations and
namespace declarations.
"""

__name__ = "gffsbol.sbol"
__author__ = "The gffsbol contributors"
__all__ = ["create_document", "set_annotation", "serialize"]

import sbol2


def create_document(namespaces=None):
    """
    Create an empty SBOL document.

    Parameters
    ----------
    namespaces : dict(str, str), optional
        Additional namespace declarations, that map a prefix to a
        namespace URI.
        A leading ``xmlns:`` in the prefix is ignored.

    Returns
    -------
    document : sbol2.Document
        The empty document.
    """
    document = sbol2.Document()
    if namespaces is not None:
        for prefix, namespace in namespaces.items():
            if prefix.startswith("xmlns:"):
                prefix = prefix[len("xmlns:"):]
            document.addNamespace(namespace, prefix)
    return document


def set_annotation(target, predicate, value, is_uri=False):
    """
    Set a custom annotation on an SBOL object.

    A previous value of the same annotation is overwritten.
    The namespace of the `predicate` should be declared in the
    document, see :func:`create_document()`.

    Parameters
    ----------
    target : sbol2.Identified
        The annotated object.
    predicate : str
        The URI of the annotation.
    value : str
        The value of the annotation.
    is_uri : bool, optional
        If true, `value` is a URI, otherwise a text literal.
    """
    property_class = sbol2.URIProperty if is_uri else sbol2.TextProperty
    property_class(target, predicate, "0", "1", None, value)


def serialize(document):
    """
    Serialize an SBOL document into *RDF/XML*.

    Parameters
    ----------
    document : sbol2.Document
        The document to be serialized.

    Returns
    -------
    xml : str
        The serialized document.
    """
    return document.writeString()
