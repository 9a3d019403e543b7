"""政策情報のサニタイズ（XSS対策）."""

from bs4 import BeautifulSoup

from src.domain.value_objects.candidate_profile import ProgramInfo


def strip_html(value: str | None) -> str | None:
    """HTMLタグを除去してテキストのみを返す.

    script / style 要素は中身ごと削除する。Noneはそのまま返す。
    """
    if value is None:
        return None
    soup = BeautifulSoup(value, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text().strip()


def sanitize_program_info(program_info: ProgramInfo | None) -> ProgramInfo | None:
    """政策情報のタイトルと本文からHTMLを除去する."""
    if program_info is None:
        return None
    return ProgramInfo(
        title=strip_html(program_info.title),
        body=strip_html(program_info.body),
    )
