"""Exception hierarchy for the draft publishing pipeline"""


class DraftpubError(Exception):
    """Base class for all pipeline errors."""


class DraftError(DraftpubError):
    """A single staged draft cannot be published; the batch continues."""

    def __init__(self, draft: str, message: str):
        self.draft = draft
        super().__init__(f"Draft {draft} {message}")


class MissingFieldError(DraftError):
    """A required meta field (title, date) is absent or empty."""

    def __init__(self, draft: str, field: str):
        self.field = field
        super().__init__(draft, f"is missing meta.{field}")


class DraftFormatError(DraftError):
    """The staged draft file is unreadable or not a valid draft document."""

    def __init__(self, draft: str, reason: str):
        self.reason = reason
        super().__init__(draft, f"is malformed: {reason}")


class AssetPayloadError(DraftpubError):
    """An embedded image payload cannot be decoded; only that asset is dropped."""


class PublishError(DraftpubError):
    """A destination (article, asset store, index) cannot be written; the run aborts."""


class ArticleNotFoundError(DraftpubError):
    """No archived draft, index entry or article exists for a slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"No article found for slug '{slug}'")


class IndexFormatError(DraftpubError):
    """The listing index file exists but cannot be read as a list of entries."""
