# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"
__all__ = [
    "MalformedRecordError",
    "MalformedDateError",
    "MalformedProvenanceError",
    "OrphanContinuationError",
]

from ..file import InvalidFileError


class _LineError(InvalidFileError):
    """
    Base class for errors that can be attributed to a single line.

    Parameters
    ----------
    message : str
        Description of the problem.
    line_number : int, optional
        The 1-based number of the offending line.
    """

    def __init__(self, message, line_number=None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class MalformedRecordError(_LineError):
    """
    Indicates a feature record with less than 9 columns, a missing
    ``ID`` attribute or non-integer coordinates.
    """
    pass


class MalformedDateError(_LineError):
    """
    Indicates that the date of a provenance comment is not a valid
    ``YYMMDD`` date.
    """
    pass


class MalformedProvenanceError(_LineError):
    """
    Indicates a ``created from`` comment with an empty product, source
    entity or agent.
    """
    pass


class OrphanContinuationError(_LineError):
    """
    Indicates a provenance continuation comment (``# # ...``) that
    appears before any ``created from`` comment.
    """
    pass
