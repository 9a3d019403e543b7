"""候補者管理に関するDTO.

入力DTOと、信頼境界を越えて外部に出す投影（ビューモデル）を定義する。
ビューモデルは外部向けにcamelCaseのフィールド名でシリアライズされる。
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.value_objects.candidate_profile import (
    CandidateLinks,
    ContactInfo,
    ProgramInfo,
)


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class UpdateCandidateProfileInputDto:
    """候補者プロフィール更新の入力DTO."""

    candidate_id: str
    contact: ContactInfo | None = None
    links: CandidateLinks | None = None
    program_info: ProgramInfo | None = None


# =============================================================================
# View models (projection output)
# =============================================================================


class _ViewModel(PydanticBaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ContactView(_ViewModel):
    """連絡先の外部表現."""

    postal: str | None = None
    email: str | None = None
    phone: str | None = None


class LinksView(_ViewModel):
    """リンクの外部表現."""

    facebook: str | None = None
    personal: str | None = None
    twitter: str | None = None
    wikipedia: str | None = None


class ProgramInfoView(_ViewModel):
    """政策情報の外部表現."""

    title: str | None = None
    body: str | None = None


class HiddenCandidateView(_ViewModel):
    """非表示の候補者の外部表現. これ以外のフィールドは一切含めない."""

    status: Literal["hidden"] = "hidden"
    hidden: Literal[True] = True


class CandidateView(_ViewModel):
    """active / locked の候補者の外部表現.

    個々のいいね（投票者）は含めず、件数（num_likes）のみを公開する。
    """

    id: int | None = None
    candidate_id: str
    first_name: str
    last_name: str
    full_name: str
    contact: ContactView | None = None
    links: LinksView | None = None
    program_info: ProgramInfoView | None = None
    nominator_user: str | None = None
    own_user: str | None = None
    accepted_nomination_at: datetime | None = None
    accepted_nomination: bool
    locked_at: datetime | None = None
    hidden_at: datetime | None = None
    status: Literal["active", "locked"]
    active: bool
    locked: bool
    hidden: Literal[False] = False
    num_likes: int
    comments: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
