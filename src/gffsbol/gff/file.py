# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"
__all__ = ["GFFFile", "LineType", "Strand", "parse_attributes", "parse_record"]

from enum import Enum, auto
from ..file import TextFile
from .error import MalformedRecordError


class LineType(Enum):
    """
    The role of a line in an annotated-genome file.

        - **EMPTY** - An empty line, that is ignored
        - **COMMENT** - A line starting with ``#``
        - **RECORD** - A tab separated feature record
        - **SEQUENCE_HEADER** - The ``>`` line starting the sequence
          section
        - **SEQUENCE** - Raw sequence data after the header
    """

    EMPTY = auto()
    COMMENT = auto()
    RECORD = auto()
    SEQUENCE_HEADER = auto()
    SEQUENCE = auto()


class Strand(Enum):
    """
    The strand of a feature record.
    Unstranded (``.``) and unknown (``?``) strands are represented by
    ``None`` instead.
    """

    FORWARD = auto()
    REVERSE = auto()


class GFFFile(TextFile):
    """
    This class represents an annotated genome in a *GFF3*-like format:
    tab separated feature records and ``#`` comments, followed by a
    single ``>`` header line and the raw sequence.

    Each line is classified exactly once, in file order.
    As soon as the ``>`` header line is encountered, all following
    lines are regarded as sequence data, regardless of their content.

    Each feature record consists of the 9 columns of GFF3:

    ==============  ========================  ===============================================
    **seqid**       ``str``                   The ID of the reference sequence
    **source**      ``str``                   Source of the data (e.g. ``SGD``)
    **type**        ``str``                   Type of the feature (e.g. ``CDS``)
    **start**       ``int``                   Start coordinate of the feature
    **end**         ``int``                   End coordinate of the feature
    **score**       ``str`` or ``None``       Optional score, ``None`` for ``.``
    **strand**      ``Strand`` or ``None``    Strand, ``None`` if not stranded or unknown
    **phase**       ``str`` or ``None``       Reading frame shift, ``None`` for ``.``
    **attributes**  ``dict``                  Additional properties of the feature
    ==============  ========================  ===============================================

    Examples
    --------

    >>> from io import StringIO
    >>> text = "chrXI\\tSGD\\tgene\\t1\\t10\\t.\\t+\\t.\\tID=G1;Name=G1\\n>seq\\nACGT"
    >>> gff_file = GFFFile.read(StringIO(text))
    >>> print(len(gff_file))
    1
    >>> seqid, source, type, start, end, score, strand, phase, attrib = gff_file[0]
    >>> print(type, start, end, strand)
    gene 1 10 Strand.FORWARD
    >>> print(attrib)
    {'ID': 'G1', 'Name': 'G1'}
    >>> print(gff_file.sequence_lines())
    ['ACGT']
    """

    def __init__(self):
        super().__init__()
        # Stores the line type for each line
        self._line_types = []
        # Maps entry indices to line indices
        self._entries = []

    @classmethod
    def read(cls, file):
        """
        Read an annotated-genome file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Returns
        -------
        file_object : GFFFile
            The parsed file.
        """
        file = super().read(file)
        file._index_lines()
        return file

    def line_types(self):
        """
        Iterate over all lines together with their classification.

        Yields
        ------
        line_index : int
            The 0-based index of the line.
        line_type : LineType
            The classification of the line.
        line : str
            The line itself.
        """
        for i, (line_type, line) in enumerate(zip(self._line_types, self.lines)):
            yield i, line_type, line

    def comments(self):
        """
        Get the comment lines in the file.

        Returns
        -------
        comments : list of tuple(str, int)
            The comment lines (including the leading ``#``) and their
            line indices, sorted by their line order.
        """
        return [
            (line, i)
            for i, line_type, line in self.line_types()
            if line_type == LineType.COMMENT
        ]

    def sequence_header(self):
        """
        Get the header line of the sequence section.

        Returns
        -------
        header : str or None
            The header without the leading ``>``, ``None`` if the file
            has no sequence section.
        """
        for _, line_type, line in self.line_types():
            if line_type == LineType.SEQUENCE_HEADER:
                return line[1:]
        return None

    def sequence_lines(self):
        """
        Get the raw lines of the sequence section.

        Returns
        -------
        lines : list of str
            The lines after the ``>`` header, verbatim.
        """
        return [
            line
            for _, line_type, line in self.line_types()
            if line_type == LineType.SEQUENCE
        ]

    def __getitem__(self, index):
        if (index >= 0 and index >= len(self)) or \
           (index < 0 and -index > len(self)):
            raise IndexError(
                f"Index {index} is out of range for GFFFile with "
                f"{len(self)} entries"
            )
        line_index = self._entries[index]
        return parse_record(self.lines[line_index], line_index + 1)

    def __len__(self):
        return len(self._entries)

    def _index_lines(self):
        """
        Classify each line and track the line indices of the feature
        records, so that entry indices can be mapped onto line indices.
        """
        self._line_types = []
        self._entries = []
        in_sequence = False
        for line_i, line in enumerate(self.lines):
            if in_sequence:
                line_type = LineType.SEQUENCE
            elif len(line) == 0:
                line_type = LineType.EMPTY
            elif line[0] == "#":
                line_type = LineType.COMMENT
            elif line[0] == ">":
                line_type = LineType.SEQUENCE_HEADER
                # One-way switch: Everything after the header is sequence
                in_sequence = True
            else:
                line_type = LineType.RECORD
                self._entries.append(line_i)
            self._line_types.append(line_type)


def parse_record(line, line_number=None):
    """
    Split a tab separated feature record into its 9 columns.

    Columns beyond the ninth are ignored.

    Parameters
    ----------
    line : str
        The record line.
    line_number : int, optional
        The 1-based line number, used in error messages.

    Returns
    -------
    seqid, source, type : str
        The first three columns, verbatim.
    start, end : int
        The feature coordinates.
    score : str or None
        The score, ``None`` if it is ``.``.
    strand : Strand or None
        The strand, ``None`` for ``.`` and ``?``.
    phase : str or None
        The phase, ``None`` if it is ``.``.
    attributes : dict
        The parsed attributes column.

    Raises
    ------
    MalformedRecordError
        If the record has less than 9 columns or the coordinates are
        not integers.
    """
    columns = line.split("\t")
    if len(columns) < 9:
        raise MalformedRecordError(
            f"Expected 9 columns, but got {len(columns)}", line_number
        )
    seqid, source, type, start, end, score, strand, phase, attrib \
        = columns[:9]

    try:
        start = int(start)
        end = int(end)
    except ValueError:
        raise MalformedRecordError(
            f"Coordinates '{start}' and '{end}' are not integers", line_number
        )
    score = None if score == "." else score
    if strand == "+":
        strand = Strand.FORWARD
    elif strand == "-":
        strand = Strand.REVERSE
    else:
        # '.' (not stranded) and '?' (unknown)
        strand = None
    phase = None if phase == "." else phase
    attrib = parse_attributes(attrib)

    return seqid, source, type, start, end, score, strand, phase, attrib


def parse_attributes(attributes):
    """
    Parse the *attributes* column into a dictionary.

    The column is split at ``;`` into entries and each entry is split
    at its first ``=`` into key and value.
    If a key appears multiple times, the last value is kept.
    Values are not percent-decoded.

    Parameters
    ----------
    attributes : str
        The attributes column.

    Returns
    -------
    attributes : dict
        Maps each key to its value.
        A key without ``=`` is mapped to ``None``.

    Notes
    -----
    Escaped ``;`` and ``=`` characters inside values are not
    supported.

    Examples
    --------

    >>> print(parse_attributes("ID=G1;Name=YKL001;Note=a%3Db;Name=YKL002"))
    {'ID': 'G1', 'Name': 'YKL002', 'Note': 'a%3Db'}
    """
    attrib_dict = {}
    for entry in attributes.split(";"):
        if len(entry) == 0:
            continue
        key, sep, val = entry.partition("=")
        attrib_dict[key] = val if sep else None
    return attrib_dict
