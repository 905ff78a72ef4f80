"""
Per-language prompt names, progress messages, and UI labels.
"""

from __future__ import annotations

from dataclasses import dataclass

from chronicle.common import ConfigurationError


@dataclass(frozen=True)
class StoryLanguage:
    """Everything the pipeline and the UI need to speak one language."""

    code: str
    name: str
    searching_message: str
    writing_message: str
    illustrating_message: str
    failure_message: str
    title: str
    intro: str
    generate_label: str
    generating_label: str
    copy_label: str
    copied_label: str
    download_label: str

    def writing(self, subject_name: str) -> str:
        return self.writing_message.format(name=subject_name)

    def illustrating(self, subject_name: str) -> str:
        return self.illustrating_message.format(name=subject_name)


VIETNAMESE = StoryLanguage(
    code="vi",
    name="Vietnamese",
    searching_message="Đang tìm một doanh nhân truyền cảm hứng...",
    writing_message="Đang viết câu chuyện về {name}...",
    illustrating_message="Đang tạo hình minh họa cho câu chuyện của {name}...",
    failure_message="Đã xảy ra lỗi khi tạo câu chuyện. Vui lòng thử lại.",
    title="Biên Niên Sử Doanh Nhân",
    intro=(
        "Khám phá những khoảnh khắc định hình nên sự vĩ đại. Nhấn nút bên dưới để tạo ra "
        "một câu chuyện và hình minh họa được AI sáng tạo về hành trình của một doanh nhân nổi tiếng."
    ),
    generate_label="Tạo Câu Chuyện Mới",
    generating_label="Đang tạo...",
    copy_label="Sao Chép",
    copied_label="Đã chép!",
    download_label="Tải Ảnh",
)

ENGLISH = StoryLanguage(
    code="en",
    name="English",
    searching_message="Looking for an inspiring entrepreneur...",
    writing_message="Writing the story of {name}...",
    illustrating_message="Illustrating the story of {name}...",
    failure_message="Something went wrong while creating the story. Please try again.",
    title="Entrepreneur Chronicles",
    intro=(
        "Discover the moments that shaped greatness. Press the button below to create an "
        "AI-written story and illustration about a famous entrepreneur's journey."
    ),
    generate_label="Create a New Story",
    generating_label="Creating...",
    copy_label="Copy",
    copied_label="Copied!",
    download_label="Download Image",
)

LANGUAGES: dict[str, StoryLanguage] = {
    VIETNAMESE.code: VIETNAMESE,
    ENGLISH.code: ENGLISH,
}


def get_language(code: str) -> StoryLanguage:
    normalized = code.strip().lower()
    try:
        return LANGUAGES[normalized]
    except KeyError:
        supported = ", ".join(sorted(LANGUAGES))
        raise ConfigurationError(
            f"Unsupported story language '{code}'. Supported languages: {supported}."
        ) from None
