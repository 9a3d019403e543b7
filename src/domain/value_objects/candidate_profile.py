"""候補者のプロフィール情報（連絡先・リンク・政策情報）の Value Object."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ProgramInfo:
    """候補者の政策情報（タイトルと本文）."""

    title: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class ContactInfo:
    """候補者の連絡先."""

    postal: str | None = None
    email: str | None = None
    phone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CandidateLinks:
    """候補者の外部プロフィールへのリンク."""

    facebook: str | None = None
    personal: str | None = None
    twitter: str | None = None
    wikipedia: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
