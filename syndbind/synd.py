"""Value beans of the synd model: content, links, people, categories..."""

from .bean import CopyFrom, CopyFromBean, CopyFromHelper
from .modules import DCSubject, DCSubjectImpl

DEFAULT_CONTENT_TYPE = "text/plain"


class SyndContent(CopyFrom):
    """Textual or typed payload: (type, mode, value)."""

    PROPERTIES = ("type", "mode", "value")


class SyndContentImpl(CopyFromBean, SyndContent):
    bean_interface = SyndContent
    copy_from_helper = CopyFromHelper(
        SyndContent, {"type": str, "mode": str, "value": str}, {}
    )

    def __init__(
        self, value: str | None = None, type: str | None = None, mode: str | None = None
    ):
        self.value = value
        self.type = type
        self.mode = mode

    @property
    def type(self) -> str:
        """Content MIME type, "text/plain" when unset."""
        return self._type or DEFAULT_CONTENT_TYPE

    @type.setter
    def type(self, value: str | None) -> None:
        self._type = value


class SyndLink(CopyFrom):
    """Related resource of a feed or entry."""

    PROPERTIES = ("href", "rel", "type", "hreflang", "title", "length")


class SyndLinkImpl(CopyFromBean, SyndLink):
    bean_interface = SyndLink
    copy_from_helper = CopyFromHelper(
        SyndLink,
        {
            "href": str,
            "rel": str,
            "type": str,
            "hreflang": str,
            "title": str,
            "length": int,
        },
        {},
    )

    def __init__(
        self,
        href: str | None = None,
        rel: str = "alternate",
        type: str | None = None,
        hreflang: str | None = None,
        title: str | None = None,
        length: int = 0,
    ):
        self.href = href
        self.rel = rel
        self.type = type
        self.hreflang = hreflang
        self.title = title
        self.length = length


class SyndPerson(CopyFrom):
    """Author or contributor."""

    PROPERTIES = ("name", "uri", "email")


class SyndPersonImpl(CopyFromBean, SyndPerson):
    bean_interface = SyndPerson
    copy_from_helper = CopyFromHelper(
        SyndPerson, {"name": str, "uri": str, "email": str}, {}
    )

    def __init__(
        self, name: str | None = None, uri: str | None = None, email: str | None = None
    ):
        self.name = name
        self.uri = uri
        self.email = email


class SyndCategory(CopyFrom):
    """Category name with an optional taxonomy URI."""

    PROPERTIES = ("name", "taxonomy_uri")


class SyndCategoryImpl(CopyFromBean, SyndCategory):
    """Category backed by a Dublin Core subject.

    The subject can be shared with a DC module so that a feed's categories
    are a view over the module's subjects.
    """

    bean_interface = SyndCategory
    copy_from_helper = CopyFromHelper(
        SyndCategory, {"name": str, "taxonomy_uri": str}, {}
    )

    def __init__(
        self,
        name: str | None = None,
        taxonomy_uri: str | None = None,
        subject: DCSubject | None = None,
    ):
        self.subject = subject if subject is not None else DCSubjectImpl()
        if subject is None:
            self.name = name
            self.taxonomy_uri = taxonomy_uri

    @property
    def name(self) -> str | None:
        return self.subject.value

    @name.setter
    def name(self, value: str | None) -> None:
        self.subject.value = value

    @property
    def taxonomy_uri(self) -> str | None:
        return self.subject.taxonomy_uri

    @taxonomy_uri.setter
    def taxonomy_uri(self, value: str | None) -> None:
        self.subject.taxonomy_uri = value


class SyndEnclosure(CopyFrom):
    """Media object attached to an entry."""

    PROPERTIES = ("url", "length", "type")


class SyndEnclosureImpl(CopyFromBean, SyndEnclosure):
    bean_interface = SyndEnclosure
    copy_from_helper = CopyFromHelper(
        SyndEnclosure, {"url": str, "length": int, "type": str}, {}
    )

    def __init__(self, url: str | None = None, length: int = 0, type: str | None = None):
        self.url = url
        self.length = length
        self.type = type


class SyndImage(CopyFrom):
    """Image (logo) of a feed."""

    PROPERTIES = ("title", "url", "link", "width", "height", "description")


class SyndImageImpl(CopyFromBean, SyndImage):
    bean_interface = SyndImage
    copy_from_helper = CopyFromHelper(
        SyndImage,
        {
            "title": str,
            "url": str,
            "link": str,
            "width": int,
            "height": int,
            "description": str,
        },
        {},
    )

    def __init__(
        self,
        title: str | None = None,
        url: str | None = None,
        link: str | None = None,
        width: int | None = None,
        height: int | None = None,
        description: str | None = None,
    ):
        self.title = title
        self.url = url
        self.link = link
        self.width = width
        self.height = height
        self.description = description
