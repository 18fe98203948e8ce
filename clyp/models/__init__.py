from clyp.models.audio_post import SOUNDWAVE_LENGTH, AudioPost, PostStatus, Soundwave
from clyp.models.category import Category
from clyp.models.playlist import Eligibility, Playlist
from clyp.models.upload import UploadRequest, UploadUrlRequest, build

__all__ = [
    "SOUNDWAVE_LENGTH",
    "AudioPost",
    "Category",
    "Eligibility",
    "Playlist",
    "PostStatus",
    "Soundwave",
    "UploadRequest",
    "UploadUrlRequest",
    "build",
]
