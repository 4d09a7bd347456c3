from __future__ import annotations

from llm_workflows.core.types import SubTask
from llm_workflows.nlp.tag_parser import extract_tag, iter_tag_blocks, parse_subtasks


def test_extract_tag_returns_trimmed_content() -> None:
    text = "Some prose first.\n<reasoning>\n  It is about money.  \n</reasoning>\ntrailing"
    assert extract_tag(text, "reasoning") == "It is about money."


def test_extract_tag_missing_returns_empty_string() -> None:
    assert extract_tag("no structure at all", "selection") == ""
    assert extract_tag("<selection>never closed", "selection") == ""
    assert extract_tag("</selection> closed before <selection>", "selection") == ""
    assert extract_tag("", "selection") == ""
    assert extract_tag(None, "selection") == ""


def test_extract_tag_is_case_insensitive() -> None:
    assert extract_tag("<Reasoning>why</REASONING>", "reasoning") == "why"
    assert extract_tag("<selection>billing</selection>", "SELECTION") == "billing"


def test_extract_tag_spans_lines() -> None:
    text = "<response>\nline one\nline two\n</response>"
    assert extract_tag(text, "response") == "line one\nline two"


def test_extract_tag_first_pair_wins() -> None:
    text = "<a>first</a> middle <a>second</a>"
    assert extract_tag(text, "a") == "first"


def test_extract_tag_first_closing_terminates_nested() -> None:
    text = "<a>outer <a>inner</a> rest</a>"
    assert extract_tag(text, "a") == "outer <a>inner"


def test_extract_tag_empty_pair_is_empty_result() -> None:
    assert extract_tag("<feedback></feedback><feedback>late</feedback>", "feedback") == ""
    assert extract_tag("<feedback>   </feedback>", "feedback") == ""


def test_extract_tag_does_not_match_longer_tag_names() -> None:
    text = "<tasks><task>x</task></tasks>"
    assert extract_tag(text, "task") == "x"
    assert extract_tag(text, "tasks") == "<task>x</task>"


def test_extract_tag_keeps_offsets_with_non_ascii_text() -> None:
    # Characters whose full lowercase form changes length must not shift slicing.
    text = "İİİ ünïcode <Selection>Technical</Selection>"
    assert extract_tag(text, "selection") == "Technical"


def test_iter_tag_blocks_yields_each_pair_in_order() -> None:
    text = "<item>1</item> noise <ITEM> 2 </ITEM><item>3"
    assert list(iter_tag_blocks(text, "item")) == ["1", " 2 "]


def test_parse_subtasks_skips_malformed_groups() -> None:
    tasks_block = """
    <task>
      <type>formal</type>
      <description>Precise and technical.</description>
    </task>
    <task>
      <type>broken</type>
    </task>
    <TASK>
      <Type>conversational</Type>
      <Description>
        Friendly,
        engaging.
      </Description>
    </TASK>
    """
    assert parse_subtasks(tasks_block) == [
        SubTask(type="formal", description="Precise and technical."),
        SubTask(type="conversational", description="Friendly,\n        engaging."),
    ]


def test_parse_subtasks_empty_fields_are_skipped() -> None:
    tasks_block = "<task><type></type><description>d</description></task>"
    assert parse_subtasks(tasks_block) == []


def test_parse_subtasks_without_tasks() -> None:
    assert parse_subtasks("") == []
    assert parse_subtasks("the model ignored the format") == []
