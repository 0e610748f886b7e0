from __future__ import annotations


class ReleaseNoteError(Exception):
    """Base class for failures that abort a release note run."""


class MissingInputFile(ReleaseNoteError):
    pass


class MalformedDocument(ReleaseNoteError):
    pass


class EmptyVersionList(ReleaseNoteError):
    pass


class DeliveryFailure(ReleaseNoteError):
    pass
