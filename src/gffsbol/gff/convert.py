# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"
__all__ = [
    "CONTIG_NAME",
    "URI_PREFIX",
    "NAMESPACES",
    "FeatureRecordBuilder",
    "SequenceAccumulator",
    "get_document",
    "convert",
]

import logging
import warnings
from urllib.parse import unquote
import sbol2
from ..sbol.document import create_document, serialize, set_annotation
from ..sbol.identity import VERSION, display_id, set_homespace, top_level_uri
from ..sbol.terms import GFF3_NS, GFF3_SOURCE, RDFS_NS
from .error import MalformedRecordError
from .file import GFFFile, LineType, Strand, parse_record
from .provenance import ProvenanceChainBuilder, count_creation_headers
from .roles import DEFINITION_KINDS, classify_roles

logger = logging.getLogger(__name__)

CONTIG_NAME = "yeast_chr11_3_34"
URI_PREFIX = "http://ncl.ac.uk/syntheticyeast/"
# Namespace declarations passed to the serializer
NAMESPACES = {
    "xmlns:rdfs": RDFS_NS,
    "xmlns:gff3": GFF3_NS,
}

_ORIENTATIONS = {
    Strand.FORWARD: sbol2.SBOL_ORIENTATION_INLINE,
    Strand.REVERSE: sbol2.SBOL_ORIENTATION_REVERSE_COMPLEMENT,
}


class FeatureRecordBuilder:
    """
    Convert feature records into sequence annotations of the root
    definition.

    All records with the same ``ID`` attribute belong to the same
    sequence annotation:
    The first record creates the annotation, each following record
    only adds another location.
    For records whose type is in :attr:`DEFINITION_KINDS`, a
    subcomponent definition and a component instance are created
    additionally.

    Parameters
    ----------
    document : sbol2.Document
        The document new definitions are added to.
    root : sbol2.ComponentDefinition
        The definition representing the whole contig.
    registry : dict(str, sbol2.ComponentDefinition)
        Maps URIs to existing definitions.
        New definitions are added to it.
    uri_prefix : str
        The namespace prefix for new top-level objects.

    Attributes
    ----------
    annotations : dict(str, sbol2.SequenceAnnotation)
        Maps feature IDs to their sequence annotation.
    """

    def __init__(self, document, root, registry, uri_prefix):
        self._document = document
        self._root = root
        self._registry = registry
        self._uri_prefix = uri_prefix
        self.annotations = {}

    def process(self, line, line_number=None):
        """
        Process a single feature record.

        Parameters
        ----------
        line : str
            The tab separated record.
        line_number : int, optional
            The 1-based line number, used in error messages.

        Returns
        -------
        annotation : sbol2.SequenceAnnotation
            The annotation the record was merged into.

        Raises
        ------
        MalformedRecordError
            If the record is malformed or has no ``ID`` attribute.
        """
        _, source, type, start, end, _, strand, _, attrib \
            = parse_record(line, line_number)
        feature_id = attrib.get("ID")
        if not feature_id:
            raise MalformedRecordError(
                "Record has no 'ID' attribute", line_number
            )
        name = attrib.get("Name")

        annotation = self.annotations.get(feature_id)
        if annotation is not None:
            # Further location of an already known feature
            _add_location(annotation, start, end, strand, name)
            return annotation

        annotation = self._root.sequenceAnnotations.create(
            display_id(feature_id + "_anno")
        )
        if name is not None:
            annotation.name = name
        self.annotations[feature_id] = annotation
        _add_location(annotation, start, end, strand, name)

        if type in DEFINITION_KINDS:
            definition = self._create_definition(
                feature_id, name, source, type, attrib
            )
            component = self._root.components.create(
                display_id(feature_id + "_component")
            )
            component.definition = definition.identity
            annotation.component = component.identity
        return annotation

    def _create_definition(self, feature_id, name, source, type, attrib):
        uri = top_level_uri(self._uri_prefix, feature_id)
        definition = self._registry.get(uri)
        if definition is None:
            definition = sbol2.ComponentDefinition(
                display_id(feature_id), sbol2.BIOPAX_DNA, VERSION
            )
            self._document.addComponentDefinition(definition)
            self._registry[uri] = definition
        else:
            warnings.warn(
                f"Definition for '{feature_id}' already exists, "
                f"the record is merged into it"
            )
        if name is not None:
            definition.name = name
        roles = [str(role) for role in definition.roles]
        for role in classify_roles(type, attrib.get("Ontology_term")):
            if role not in roles:
                roles.append(role)
        definition.roles = roles
        note = attrib.get("Note")
        if note:
            definition.description = unquote(note)
        set_annotation(definition, GFF3_SOURCE, source)
        logger.debug("Created definition '%s'", definition.displayId)
        return definition


def _add_location(annotation, start, end, strand, name):
    """
    Append a :class:`sbol2.Range` to the annotation.
    The first range is named ``range``, the following ones ``range2``,
    ``range3``, etc.
    """
    number = len(annotation.locations) + 1
    label = "range" if number == 1 else f"range{number}"
    location = annotation.locations.createRange(label)
    location.start = start
    location.end = end
    if name is not None:
        location.name = name
    # Unstranded and unknown strands get no orientation at all
    location.orientation = _ORIENTATIONS.get(strand)
    return location


class SequenceAccumulator:
    """
    Collect the raw sequence lines after the ``>`` header and attach
    them as :class:`sbol2.Sequence` to the root definition.

    Parameters
    ----------
    document : sbol2.Document
        The document the sequence is added to.
    root : sbol2.ComponentDefinition
        The definition representing the whole contig.
    contig_name : str
        The name of the contig, the display ID of the sequence is
        derived from it.

    Attributes
    ----------
    header : str or None
        The sequence header without the leading ``>``.
        ``None`` as long as no header was encountered.
    """

    def __init__(self, document, root, contig_name):
        self._document = document
        self._root = root
        self._contig_name = contig_name
        self._lines = []
        self.header = None

    def start(self, header):
        self.header = header

    def append(self, line):
        self._lines.append(line)

    def finalize(self):
        """
        Create the :class:`sbol2.Sequence` from the collected lines.

        The lines are concatenated without separator and lower-cased.

        Returns
        -------
        sequence : sbol2.Sequence
            The created sequence, already attached to the root
            definition.
        """
        elements = "".join(self._lines).lower()
        sequence = sbol2.Sequence(
            display_id(self._contig_name + "_seq"), elements,
            sbol2.SBOL_ENCODING_IUPAC, VERSION
        )
        self._document.addSequence(sequence)
        self._root.sequences = [sequence.identity]

        if self.header is None:
            warnings.warn("The file contains no sequence section")
        else:
            logger.debug(
                "Read sequence '%s' with %d bases", self.header, len(elements)
            )
            self._check_bounds(len(elements))
        return sequence

    def _check_bounds(self, length):
        """
        Warn if any location of the root definition ends beyond the
        sequence.
        """
        ends = [
            location.end
            for annotation in self._root.sequenceAnnotations
            for location in annotation.locations
        ]
        beyond = [end for end in ends if end > length]
        if beyond:
            warnings.warn(
                f"{len(beyond)} location(s) end beyond the length of "
                f"sequence '{self.header}' ({length}), "
                f"maximum end is {max(beyond)}"
            )


def get_document(gff_file, contig_name=CONTIG_NAME, uri_prefix=URI_PREFIX):
    """
    Convert an annotated genome into an SBOL document.

    Each line is processed in file order:
    Feature records are merged into sequence annotations by their
    ``ID`` attribute, provenance comments are converted into
    activities and the lines after the ``>`` header form the sequence
    of the root definition.

    Parameters
    ----------
    gff_file : GFFFile
        The file to be converted.
    contig_name : str, optional
        The name of the contig.
        The root definition and the sequence are named after it.
    uri_prefix : str, optional
        The namespace prefix for all top-level objects.
        Must end with ``/``.

    Returns
    -------
    document : sbol2.Document
        The SBOL document.
        The root definition has the URI
        ``<uri_prefix><contig_name>/1``.

    Raises
    ------
    MalformedRecordError
        If a feature record is malformed.
    MalformedDateError
        If the date of a provenance comment is invalid.
    MalformedProvenanceError
        If a provenance comment has an empty product, source entity or
        agent.
    OrphanContinuationError
        If a provenance continuation appears before the first
        ``created from`` comment.
    """
    set_homespace(uri_prefix)
    document = create_document(NAMESPACES)
    root = sbol2.ComponentDefinition(
        display_id(contig_name), sbol2.BIOPAX_DNA, VERSION
    )
    document.addComponentDefinition(root)
    registry = {str(root.identity): root}

    n_activities = count_creation_headers(
        line for line, _ in gff_file.comments()
    )
    records = FeatureRecordBuilder(document, root, registry, uri_prefix)
    provenance = ProvenanceChainBuilder(
        document, root, registry, uri_prefix, n_activities
    )
    sequence = SequenceAccumulator(document, root, contig_name)

    for line_i, line_type, line in gff_file.line_types():
        line_number = line_i + 1
        if line_type == LineType.SEQUENCE:
            sequence.append(line)
        elif line_type == LineType.COMMENT:
            provenance.process(line, line_number)
        elif line_type == LineType.SEQUENCE_HEADER:
            sequence.start(line[1:])
        elif line_type == LineType.RECORD:
            records.process(line, line_number)
        # Empty lines are ignored
    sequence.finalize()

    logger.info(
        "Converted %d features and %d activities of '%s'",
        len(records.annotations), n_activities, contig_name
    )
    return document


def convert(file, contig_name=CONTIG_NAME, uri_prefix=URI_PREFIX):
    """
    Read an annotated genome and serialize it as SBOL document in
    *RDF/XML* format.

    Parameters
    ----------
    file : file-like object or str
        The file to be read.
        Alternatively a file path can be supplied.
    contig_name : str, optional
        The name of the contig.
    uri_prefix : str, optional
        The namespace prefix for all top-level objects.

    Returns
    -------
    xml : str
        The serialized document.
    """
    gff_file = GFFFile.read(file)
    document = get_document(gff_file, contig_name, uri_prefix)
    return serialize(document)
