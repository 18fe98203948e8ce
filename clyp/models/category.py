"""Category listing model."""

from typing import Optional

from pydantic import Field

from clyp.models.base import WireModel


class Category(WireModel):
    """A titled, URL-addressable grouping of audio posts.

    Built from the category listing endpoints, or by hand when the caller
    already knows the listing URL::

        Category(url="https://api.clyp.it/featuredlist/featured")
    """

    title: Optional[str] = Field(default=None, alias="Title")
    url: str = Field(alias="Location")
