"""占位符识别与日期占位测试."""

from gongwen.data.placeholder_normalizer import (
    DATE_PLACEHOLDER,
    apply_date_placeholders,
    find_placeholders,
    is_confirmed_placeholder,
    normalize_content,
    prompt_has_date,
    split_placeholder_segments,
)


def test_confirmed_placeholder():
    """测试占位符判定."""
    assert is_confirmed_placeholder("〔占位：主送单位〕")
    assert is_confirmed_placeholder("〔YYYY〕")
    assert not is_confirmed_placeholder("〔发文字号〕")
    assert not is_confirmed_placeholder("占位")


def test_find_placeholders_offsets():
    """测试占位符偏移相对于全文."""
    text = "第一行\n请于〔占位：日期〕前报送〔材料〕"
    spans = find_placeholders(text)
    assert len(spans) == 1
    assert spans[0].text == "〔占位：日期〕"
    assert text[spans[0].start:spans[0].end] == "〔占位：日期〕"


def test_find_placeholders_is_repeatable():
    """测试重复查找结果一致."""
    text = "〔占位：一〕和〔占位：二〕"
    assert find_placeholders(text) == find_placeholders(text)
    assert len(find_placeholders(text, start=1)) == 1


def test_split_segments():
    """测试按〔〕切分行文本."""
    segments = split_placeholder_segments("请于〔占位：日期〕前报送")
    assert [segment.text for segment in segments] == ["请于", "〔占位：日期〕", "前报送"]
    assert [segment.is_placeholder for segment in segments] == [False, True, False]
    assert split_placeholder_segments("") == []


def test_normalize_content():
    """测试去除加粗、统一换行、去除尾部空白."""
    assert normalize_content("**重要**通知\r\n内容__  \n\n") == "重要通知\n内容"


def test_prompt_has_date():
    assert prompt_has_date("会议定于2024年5月10日召开")
    assert prompt_has_date("截止 2024-05-10")
    assert not prompt_has_date("请写一份会议通知")


def test_replace_fabricated_date():
    """测试指令未给出日期时替换生成的日期."""
    value = "沈阳师范大学\n  2024年5月10日"
    assert apply_date_placeholders(value, "请写一份通知") == f"沈阳师范大学\n{DATE_PLACEHOLDER}"


def test_redact_year_in_bracket_line():
    """测试〔〕行内的年份替换为 YYYY."""
    assert apply_date_placeholders("〔沈师发〔2024〕12号〕", "写通知") == "〔沈师发〔YYYY〕12号〕"


def test_keep_date_when_prompt_has_date():
    """测试指令给出日期时保留原文."""
    value = "沈阳师范大学\n2024年5月10日"
    assert apply_date_placeholders(value, "成文日期为2024年5月10日") == value


def test_inline_date_is_kept():
    """测试正文中的日期不替换."""
    value = "会议于2024年5月10日召开。"
    assert apply_date_placeholders(value, "写通知") == value
