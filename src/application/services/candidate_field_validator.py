"""候補者の連絡先・リンクのフィールド単位バリデーション."""

import re

from typing import ClassVar

from pydantic import EmailStr, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.exceptions import ValidationError
from src.domain.value_objects.candidate_profile import CandidateLinks, ContactInfo


_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)
_url_adapter: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


class CandidateFieldValidator:
    """連絡先（メール・電話番号）とリンク（URL）を検証する.

    空文字列・Noneは検証対象外。エラーはフィールドごとに収集し、
    あるフィールドの不正が他のフィールドの検証に影響しないようにする。
    """

    # 携帯電話番号の形式（地域ごと）
    PHONE_PATTERNS: ClassVar[dict[str, re.Pattern[str]]] = {
        "fr-FR": re.compile(r"^(\+?33|0)[67]\d{8}$"),
    }

    LINK_FIELDS: ClassVar[tuple[str, ...]] = (
        "facebook",
        "personal",
        "twitter",
        "wikipedia",
    )

    def __init__(self, phone_region: str = "fr-FR") -> None:
        """バリデータを初期化する.

        Args:
            phone_region: 電話番号の地域（例: "fr-FR"）

        Raises:
            ValueError: 未対応の地域が指定された場合
        """
        if phone_region not in self.PHONE_PATTERNS:
            raise ValueError(f"Unsupported phone region: {phone_region}")
        self.phone_region = phone_region
        self._phone_pattern = self.PHONE_PATTERNS[phone_region]

    def validate(
        self,
        contact: ContactInfo | None,
        links: CandidateLinks | None,
    ) -> dict[str, str]:
        """全フィールドを検証し、エラーをフィールドパスごとに返す.

        Returns:
            {"contact.email": "...", "links.twitter": "..."} 形式の辞書。
            エラーが無ければ空の辞書。
        """
        errors: dict[str, str] = {}

        if contact is not None:
            if contact.email and not self.is_email(contact.email):
                errors["contact.email"] = "Invalid email address"
            if contact.phone and not self.is_mobile_phone(contact.phone):
                errors["contact.phone"] = (
                    f"Invalid mobile phone number for {self.phone_region}"
                )

        if links is not None:
            for field in self.LINK_FIELDS:
                value = getattr(links, field)
                if value and not self.is_url(value):
                    errors[f"links.{field}"] = "Invalid URL"

        return errors

    def ensure_valid(
        self,
        contact: ContactInfo | None,
        links: CandidateLinks | None,
    ) -> None:
        """検証し、エラーがあれば全フィールド分をまとめて送出する.

        Raises:
            ValidationError: 1つ以上のフィールドが不正な場合
        """
        errors = self.validate(contact, links)
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def is_email(value: str) -> bool:
        try:
            _email_adapter.validate_python(value)
        except PydanticValidationError:
            return False
        return True

    @staticmethod
    def is_url(value: str) -> bool:
        try:
            _url_adapter.validate_python(value)
        except PydanticValidationError:
            return False
        return True

    def is_mobile_phone(self, value: str) -> bool:
        return bool(self._phone_pattern.match(value))
