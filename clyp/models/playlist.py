"""Playlist model."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import Field

from clyp.models.audio_post import AudioPost
from clyp.models.base import WireModel


class Eligibility(str, Enum):
    """Whether a playlist may be submitted for featuring."""

    ELIGIBLE = "Eligible"
    INELIGIBLE = "Ineligible"


class Playlist(WireModel):
    """A named collection of audio posts, as returned by the playlist endpoint."""

    posts: List[AudioPost] = Field(default_factory=list, alias="AudioFiles", frozen=True)
    id: str = Field(alias="PlaylistId", frozen=True)
    is_modifiable: bool = Field(default=False, alias="Modifiable")
    is_content_administrator: bool = Field(default=False, alias="ContentAdministrator")
    feature_submission_eligibility: Optional[Eligibility] = Field(default=None, alias="FeatureSubmissionEligibility")
    upload_token: Optional[str] = Field(default=None, alias="PlaylistUploadToken")
