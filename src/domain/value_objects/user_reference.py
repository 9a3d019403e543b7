"""ユーザー参照の正規化.

ユーザーは生のID（str / int / UUID）としても、IDを持つオブジェクト
（Userエンティティやマッピング）としても渡される。比較の前に境界で
一度だけ正規の文字列IDへ変換する。
"""

from collections.abc import Mapping
from typing import Any, NewType
from uuid import UUID


UserId = NewType("UserId", str)


def resolve_user_id(ref: Any) -> UserId:
    """ユーザー参照から正規化されたユーザーIDを取り出す.

    Args:
        ref: 生のID、``id`` 属性を持つオブジェクト、または
            ``id`` / ``_id`` キーを持つマッピング

    Returns:
        文字列化されたユーザーID

    Raises:
        ValueError: ref が None、または空のIDの場合
        TypeError: IDを取り出せない型の場合
    """
    if ref is None:
        raise ValueError("User reference is required")

    # boolはintのサブクラスなので先に弾く
    if isinstance(ref, bool):
        raise TypeError("Unsupported user reference type: bool")

    if isinstance(ref, str | int | UUID):
        value = str(ref).strip()
        if not value:
            raise ValueError("User reference is empty")
        return UserId(value)

    if isinstance(ref, Mapping):
        for key in ("id", "_id"):
            if ref.get(key) is not None:
                return resolve_user_id(ref[key])
        raise TypeError("User mapping has no 'id' or '_id'")

    nested = getattr(ref, "id", None)
    if nested is not None and nested is not ref:
        return resolve_user_id(nested)

    raise TypeError(f"Unsupported user reference type: {type(ref).__name__}")
