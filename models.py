from pydantic import BaseModel, Field
from typing import Optional


class DownloadLink(BaseModel):
    label: str
    url: str
    size: Optional[str] = None
    quality: Optional[str] = None  # e.g. "1080p", "720p"
    click_count: int = Field(default=0, ge=0)


class ShortLink(BaseModel):
    label: str = ""
    url: str  # shortened url, or original_url when the provider failed
    original_url: str
    size: Optional[str] = None
    click_count: int = Field(default=0, ge=0)


class HomeConfig(BaseModel):
    heroTitle: str
    heroSubtitle: str
    showTrending: bool = True
    showSearch: bool = True
    showGenres: bool = True


class AdminLogin(BaseModel):
    password: str = Field(min_length=1)


class HomeConfigUpdate(BaseModel):
    heroTitle: Optional[str] = None
    heroSubtitle: Optional[str] = None
    showTrending: Optional[bool] = None
    showSearch: Optional[bool] = None
    showGenres: Optional[bool] = None
