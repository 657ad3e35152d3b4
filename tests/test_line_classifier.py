"""行结构识别测试."""

import pytest

from gongwen.data.line_classifier import build_context, classify_line, classify_lines, detect_title_index
from gongwen.data.markup_tagger import tag_text, visible_text
from gongwen.data.models import LineRole

SAMPLE_LINES = [
    "沈阳师范大学文件",
    "〔沈师发〔2024〕12号〕",
    "关于召开年度总结会议的通知",
    "各学院：",
    "为做好年度总结工作，现将有关事项通知如下。",
    "一、会议时间",
    "附件：会议日程",
    "抄送：校领导",
    "沈阳师范大学办公室2024年12月1日印发",
    "",
    "沈阳师范大学",
    "2024年12月20日",
]


def test_classify_sample_document():
    """测试完整公文各行的角色."""
    assert classify_lines(SAMPLE_LINES) == [
        LineRole.DOC_HEADER,
        LineRole.DOC_NUMBER,
        LineRole.TITLE,
        LineRole.ADDRESSEE,
        LineRole.BODY,
        LineRole.SECTION_HEADING,
        LineRole.ATTACHMENT,
        LineRole.POST_DISTRIBUTION,
        LineRole.PRINT_NOTICE,
        LineRole.BLANK,
        LineRole.SIGNATURE,
        LineRole.SIGNATURE,
    ]


def test_only_first_title_like_line_is_title():
    """测试只有第一个标题候选行被识别为标题."""
    lines = ["关于开展教学检查的通知", "关于补充材料的通知", "正文", "落款单位", "日期"]
    roles = classify_lines(lines)
    assert roles[0] == LineRole.TITLE
    assert roles[1] == LineRole.BODY


def test_no_title_is_not_invented():
    """测试没有文种关键词时不识别标题."""
    lines = ["各单位：", "请按时完成。", "沈阳师范大学"]
    assert detect_title_index(lines) == -1
    assert LineRole.TITLE not in classify_lines(lines)


def test_long_title_is_not_title():
    """测试超过30字的行不作为标题."""
    line = "关于" + "进一步加强" * 6 + "的通知"
    assert detect_title_index([line]) == -1


def test_long_header_falls_through():
    """测试超过12字的“文件”行不作为版头."""
    lines = ["沈阳师范大学教务处学生工作部文件", "正文一", "正文二", "正文三"]
    assert classify_lines(lines)[0] == LineRole.BODY


def test_signature_precedes_later_rules():
    """测试末尾两行即使以冒号结尾也识别为落款."""
    lines = ["关于放假的通知", "各学院：", "正文。", "联系人：", "沈阳师范大学："]
    roles = classify_lines(lines)
    assert roles[3] == LineRole.SIGNATURE
    assert roles[4] == LineRole.SIGNATURE


def test_context_ignores_blank_lines():
    """测试末尾空行不影响落款行号."""
    context = build_context(["标题通知", "沈阳师范大学", "2024年1月1日", "", "   "])
    assert context.last_index == 2
    assert context.second_last_index == 1


@pytest.mark.parametrize("line,role", [
    ("   ", LineRole.BLANK),
    ("主送：各学院", LineRole.POST_DISTRIBUTION),
    ("学校办公室印发", LineRole.PRINT_NOTICE),
    ("附件:名单", LineRole.ATTACHMENT),
    ("十二、其他事项", LineRole.SECTION_HEADING),
    ("普通正文", LineRole.BODY),
])
def test_classify_single_line(line, role):
    """测试单行规则."""
    lines = [line, "尾部一", "尾部二"]
    assert classify_line(line, 0, build_context(lines)) == role


def test_reclassify_visible_text_is_stable():
    """测试对标记后的可见文本重新识别，角色不变."""
    text = "\n".join(SAMPLE_LINES)
    tagged = tag_text(text)
    roles = [line.role for line in tagged]
    assert [line.role for line in tag_text(visible_text(tagged))] == roles
