# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Reconstruction of a *PROV-O* activity chain from provenance comments.

Two kinds of comments are recognized:

    - A *creation header*, e.g.
      ``# productA created from chrXI 200101 by ToolX (description)``
    - A *continuation*, e.g. ``# # more description``, that extends
      the description of the most recent creation header.
"""

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"
__all__ = [
    "CreationHeader",
    "Continuation",
    "parse_creation_header",
    "parse_continuation",
    "parse_comment",
    "parse_date",
    "count_creation_headers",
    "ProvenanceChainBuilder",
    "PLACEHOLDER_DESCRIPTION",
]

import datetime
import logging
import re
from dataclasses import dataclass
from urllib.parse import unquote
import sbol2
from ..sbol.document import set_annotation
from ..sbol.identity import VERSION, display_id, top_level_uri
from ..sbol.terms import SEE_ALSO, SOURCE_ROLE
from .error import (
    MalformedDateError,
    MalformedProvenanceError,
    OrphanContinuationError,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_DESCRIPTION = (
    "Automatically generated from GFF3 provenance; "
    "no further information available"
)

_CREATION_PATTERN = re.compile(r"# (.*) created from (.*) (.*) by (.*) \((.*)\)")
_CONTINUATION_PATTERN = re.compile(r"# # (.*)")
_DATE_PATTERN = re.compile(r"\d{6}")
_DATE_FORMAT = "%y%m%d"


@dataclass(frozen=True)
class CreationHeader:
    """
    A parsed ``created from`` comment.

    Attributes
    ----------
    product : str
        The name of the created product.
    source_entity : str
        The name of the entity the product was created from.
    date : str
        The unparsed ``YYMMDD`` date token.
    agent : str
        The tool or person that created the product.
    description : str
        The text in the trailing parentheses.
    text : str
        The matched comment without the leading ``# ``.
    """

    product: str
    source_entity: str
    date: str
    agent: str
    description: str
    text: str


@dataclass(frozen=True)
class Continuation:
    """
    A parsed ``# # ...`` comment.

    Attributes
    ----------
    text : str
        The comment text after ``# # ``, not yet percent-decoded.
    """

    text: str


def parse_creation_header(line):
    """
    Parse a ``created from`` provenance comment.

    Parameters
    ----------
    line : str
        The comment line.

    Returns
    -------
    header : CreationHeader or None
        The parsed comment, ``None`` if the line is no creation header.

    Examples
    --------

    >>> header = parse_creation_header(
    ...     "# productA created from chrXI 200101 by ToolX (desc)"
    ... )
    >>> print(header.product, header.source_entity, header.date, header.agent)
    productA chrXI 200101 ToolX
    """
    match = _CREATION_PATTERN.search(line)
    if match is None:
        return None
    product, source_entity, date, agent, description = match.groups()
    return CreationHeader(
        product, source_entity, date, agent, description,
        match.group(0)[2:]
    )


def parse_continuation(line):
    """
    Parse a ``# # ...`` provenance continuation comment.

    Parameters
    ----------
    line : str
        The comment line.

    Returns
    -------
    continuation : Continuation or None
        The parsed comment, ``None`` if the line is no continuation.
    """
    match = _CONTINUATION_PATTERN.search(line)
    if match is None:
        return None
    return Continuation(match.group(1))


def parse_comment(line):
    """
    Parse a comment line into a provenance entry.

    A creation header takes precedence over a continuation.

    Parameters
    ----------
    line : str
        The comment line.

    Returns
    -------
    entry : CreationHeader or Continuation or None
        The parsed comment, ``None`` if the comment carries no
        provenance information.
    """
    header = parse_creation_header(line)
    if header is not None:
        return header
    return parse_continuation(line)


def parse_date(token, line_number=None):
    """
    Parse a ``YYMMDD`` date token.

    Parameters
    ----------
    token : str
        The date token.
    line_number : int, optional
        The 1-based line number, used in error messages.

    Returns
    -------
    date : datetime
        Midnight (UTC) of the given day.

    Raises
    ------
    MalformedDateError
        If the token is not a valid 6-digit date.
    """
    if _DATE_PATTERN.fullmatch(token) is None:
        raise MalformedDateError(
            f"'{token}' is not a date in YYMMDD format", line_number
        )
    try:
        date = datetime.datetime.strptime(token, _DATE_FORMAT)
    except ValueError:
        raise MalformedDateError(f"'{token}' is not a valid date", line_number)
    return date.replace(tzinfo=datetime.timezone.utc)


def count_creation_headers(comments):
    """
    Count the creation headers in the given comment lines.

    Parameters
    ----------
    comments : iterable object of str
        The comment lines.

    Returns
    -------
    count : int
        The number of creation headers.
    """
    return sum(1 for line in comments if parse_creation_header(line) is not None)


class ProvenanceChainBuilder:
    """
    Build activities from provenance comments.

    Activities are numbered in reverse order of appearance:
    The first creation header gets the number `total`, the last one
    gets ``1``.

    Parameters
    ----------
    document : sbol2.Document
        The document the activities and placeholder definitions are
        added to.
    root : sbol2.ComponentDefinition
        The definition representing the whole contig.
    registry : dict(str, sbol2.ComponentDefinition)
        Maps URIs to already existing definitions.
        Placeholder definitions created for unknown products are added
        to it.
    uri_prefix : str
        The namespace prefix for new top-level objects.
    total : int
        The total number of creation headers in the file.

    Attributes
    ----------
    current : sbol2.Activity or None
        The most recently created activity.
    """

    def __init__(self, document, root, registry, uri_prefix, total):
        self._document = document
        self._root = root
        self._registry = registry
        self._uri_prefix = uri_prefix
        self._counter = total
        self._description = None
        self.current = None

    def process(self, line, line_number=None):
        """
        Process a single comment line.

        Parameters
        ----------
        line : str
            The comment line.
        line_number : int, optional
            The 1-based line number, used in error messages.

        Returns
        -------
        entry : CreationHeader or Continuation or None
            The parsed comment.

        Raises
        ------
        MalformedProvenanceError
            If the product, source entity or agent of a creation header
            is empty.
        MalformedDateError
            If the date of a creation header is invalid.
        OrphanContinuationError
            If a continuation appears before any creation header.
        """
        entry = parse_comment(line)
        if isinstance(entry, CreationHeader):
            self._add_activity(entry, line_number)
        elif isinstance(entry, Continuation):
            self._continue_description(entry, line_number)
        return entry

    def _add_activity(self, header, line_number):
        for field in ("product", "source_entity", "agent"):
            if not getattr(header, field).strip():
                raise MalformedProvenanceError(
                    "Provenance comment has an empty "
                    + field.replace("_", " "),
                    line_number
                )
        ended_at_time = parse_date(header.date, line_number)

        activity = sbol2.Activity(display_id(f"prov{self._counter}"))
        self._document.add(activity)
        self._counter -= 1
        activity.name = header.agent
        activity.description = header.text
        activity.endedAtTime = ended_at_time.isoformat()
        self._description = header.text

        product_uri = top_level_uri(self._uri_prefix, header.product)
        product = self._registry.get(product_uri)
        if product is None:
            product = self._create_placeholder(header.product)
            self._registry[product_uri] = product
        product.wasDerivedFrom = [activity.identity]

        usage = activity.usages.create(display_id("usage"))
        usage.entity = self._uri_prefix + header.source_entity
        usage.roles = [SOURCE_ROLE]

        logger.debug(
            "Created activity '%s' for product '%s'",
            activity.displayId, header.product
        )
        self.current = activity

    def _create_placeholder(self, product):
        definition = sbol2.ComponentDefinition(
            display_id(product), sbol2.BIOPAX_DNA, VERSION
        )
        self._document.addComponentDefinition(definition)
        definition.name = product
        definition.description = PLACEHOLDER_DESCRIPTION
        set_annotation(definition, SEE_ALSO, self._root.identity, is_uri=True)
        logger.debug("Created placeholder definition for product '%s'", product)
        return definition

    def _continue_description(self, continuation, line_number):
        if self.current is None:
            raise OrphanContinuationError(
                "Provenance continuation without preceding "
                "'created from' comment",
                line_number
            )
        self._description += "; " + unquote(continuation.text)
        self.current.description = self._description
