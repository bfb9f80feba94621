# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffsbol.sbol"
__author__ = "The gffsbol contributors"
__all__ = [
    "VERSION",
    "clean_display_id",
    "display_id",
    "top_level_uri",
    "set_homespace",
]

import sbol2

VERSION = "1"

# Characters that are not allowed in an SBOL display ID
_REPLACED_CHARS = ".* ()-"
_TRANSLATION = str.maketrans({char: "_" for char in _REPLACED_CHARS})


def clean_display_id(label):
    """
    Turn an arbitrary label into a valid SBOL display ID.

    Each of the characters ``.``, ``*``, space, ``(``, ``)`` and ``-``
    is replaced by an underscore.
    Runs of such characters are not collapsed, i.e. each character
    yields its own underscore.

    Parameters
    ----------
    label : str
        The label to be cleaned.

    Returns
    -------
    display_id : str
        The cleaned label.

    Examples
    --------

    >>> print(clean_display_id("foo.bar (1)-x"))
    foo_bar__1__x
    """
    return label.translate(_TRANSLATION)


def display_id(label):
    """
    Get the display ID for a new SBOL object.

    :mod:`sbol2` derives the complete identity of an object from its
    display ID:
    The *persistent identity* is the persistent identity of the
    parent (or the homespace for top-level objects) followed by ``/``
    and the display ID, the *URI* is the persistent identity followed
    by ``/`` and the version ``'1'``.

    Parameters
    ----------
    label : str
        The human readable label the display ID is derived from.

    Returns
    -------
    display_id : str
        The cleaned label.

    Raises
    ------
    ValueError
        If the `label` is empty.
    """
    if not label:
        raise ValueError("The label of an SBOL object must not be empty")
    return clean_display_id(label)


def top_level_uri(prefix, label):
    """
    Get the URI a top-level object with the given label would have.

    Parameters
    ----------
    prefix : str
        The namespace prefix, ending with ``/``.
    label : str
        The human readable label of the object.

    Returns
    -------
    uri : str
        The versioned URI.

    Examples
    --------

    >>> print(top_level_uri("http://example.com/", "tag.1"))
    http://example.com/tag_1/1
    """
    return prefix + display_id(label) + "/" + VERSION


def set_homespace(prefix):
    """
    Configure :mod:`sbol2` to create compliant URIs below the given
    namespace prefix.

    Typed URIs and the online validation are switched off, so that
    the URI of a top-level object is ``<prefix><display ID>/1``.

    Parameters
    ----------
    prefix : str
        The namespace prefix, ending with ``/``.

    Raises
    ------
    ValueError
        If the prefix does not end with ``/``.
    """
    if not prefix.endswith("/"):
        raise ValueError(f"The URI prefix '{prefix}' must end with '/'")
    sbol2.setHomespace(prefix[:-1])
    sbol2.Config.setOption("sbol_compliant_uris", True)
    sbol2.Config.setOption("sbol_typed_uris", False)
    sbol2.Config.setOption("validate", False)
