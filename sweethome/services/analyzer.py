"""Canned demo-mode analysis picked from the uploaded filename."""

from dataclasses import dataclass

from sweethome.schemas.entry import AiResult

WORRIED_KEYWORDS = ("worry", "sick", "病")


@dataclass(frozen=True)
class DemoAnalysis:
    """Transcript plus structured analysis for one entry."""

    transcript: str
    summary3: tuple[str, str, str]
    emotion: str
    quick_replies: tuple[str, str, str]

    def to_ai_result(self) -> AiResult:
        return AiResult(summary3=list(self.summary3), emotion=self.emotion, quick_replies=list(self.quick_replies))


WORRIED = DemoAnalysis(
    transcript="今天去看醫生，血壓有點高，晚上有點睡不好。",
    summary3=("今天去看醫生檢查", "血壓偏高有點擔心", "晚上睡得不太好"),
    emotion="擔心",
    quick_replies=(
        "我有看到，辛苦你了，先好好休息",
        "醫生怎麼說？需要我幫你安排嗎？",
        "記得按時吃藥，我晚點再打給你",
    ),
)

CONTENT = DemoAnalysis(
    transcript="今天去公園散步，遇到老朋友，心情很好。",
    summary3=("今天去公園散步", "遇到老朋友聊了天", "心情放鬆很開心"),
    emotion="開心",
    quick_replies=(
        "我有看到～聽起來很棒！",
        "下次也帶我去那個公園",
        "謝謝你跟我分享，記得保暖喔",
    ),
)


def is_worried(original_name: str | None) -> bool:
    """Case-insensitive keyword match against the original filename."""
    name = (original_name or "").lower()
    return any(keyword in name for keyword in WORRIED_KEYWORDS)


def analyze_demo(original_name: str | None) -> DemoAnalysis:
    """Return the worried payload for worry/sick filenames, the content payload otherwise."""
    return WORRIED if is_worried(original_name) else CONTENT
