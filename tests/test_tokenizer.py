from __future__ import annotations

from hilite_engine.highlight import Span, category_at, resolve_runs, tokenize
from hilite_engine.rules import JAVA, KOTLIN, PAINT_ORDER, PYTHON, Category, RuleSet


def texts_of(text: str, spans: tuple[Span, ...], category: Category) -> list[str]:
    return [text[span.start : span.end] for span in spans if span.category is category]


def test_tokenize_is_idempotent() -> None:
    text = 'fun main() { val s = "hi" /* note */ 42 }'

    assert tokenize(text, KOTLIN) == tokenize(text, KOTLIN)


def test_spans_are_emitted_in_paint_order() -> None:
    text = '@Test fun run(): Int { return 1 } // done "x"'
    spans = tokenize(text, KOTLIN)

    ranks = [PAINT_ORDER.index(span.category) for span in spans]
    assert ranks == sorted(ranks)
    assert all(0 <= span.start < span.end <= len(text) for span in spans)


def test_line_comment_covers_embedded_keyword_and_number() -> None:
    text = "// val x = 1"
    spans = tokenize(text, KOTLIN)

    assert Span(Category.COMMENT, 0, len(text)) in spans
    assert texts_of(text, spans, Category.KEYWORD) == ["val"]
    assert texts_of(text, spans, Category.NUMBER) == ["1"]
    for offset in range(len(text)):
        assert category_at(spans, offset) is Category.COMMENT


def test_string_dominates_keywords_and_numbers_inside_it() -> None:
    text = 'val s = "if (x) 1"'
    spans = tokenize(text, KOTLIN)
    string_start, string_end = 8, len(text)

    assert Span(Category.STRING, string_start, string_end) in spans
    runs = resolve_runs(spans)
    assert Span(Category.KEYWORD, 0, 3) in runs
    for run in runs:
        if run.category in (Category.KEYWORD, Category.NUMBER):
            assert run.end <= string_start or run.start >= string_end


def test_declaration_reports_only_the_captured_name() -> None:
    text = "fun greet(name: String): Int"
    spans = tokenize(text, KOTLIN)

    assert Span(Category.DECLARATION, 4, 9) in spans
    assert texts_of(text, spans, Category.KEYWORD) == ["fun"]
    assert texts_of(text, spans, Category.TYPE) == ["String", "Int"]


def test_escaped_delimiter_stays_inside_string() -> None:
    text = r'"a\"b" + 1'
    spans = tokenize(text, KOTLIN)

    assert texts_of(text, spans, Category.STRING) == [r'"a\"b"']


def test_triple_quoted_string_spans_lines_and_wins() -> None:
    text = 'val t = """\nsay "if"\n"""'
    spans = tokenize(text, KOTLIN)

    triple = Span(Category.STRING, 8, len(text))
    assert triple in spans
    assert spans[-1] == triple
    for offset in range(8, len(text)):
        assert category_at(spans, offset) is Category.STRING


def test_unterminated_constructs_yield_no_span() -> None:
    text = 'val s = "abc\n/* pending note\nval t = 2'
    spans = tokenize(text, KOTLIN)

    assert texts_of(text, spans, Category.STRING) == []
    assert texts_of(text, spans, Category.COMMENT) == []
    assert texts_of(text, spans, Category.KEYWORD) == ["val", "val"]


def test_numbers_handle_prefixes_separators_exponents_and_suffixes() -> None:
    text = "0x1F_FF 1_000 1.5e3 42L 0b1010 12abc x9"
    spans = tokenize(text, KOTLIN)

    assert texts_of(text, spans, Category.NUMBER) == [
        "0x1F_FF",
        "1_000",
        "1.5e3",
        "42L",
        "0b1010",
    ]


def test_custom_number_regex_replaces_default_rule() -> None:
    rules = RuleSet(name="digits", number_regex=r"\d+")
    text = "a1 0x22"

    assert texts_of(text, tokenize(text, rules), Category.NUMBER) == ["1", "0", "22"]


def test_annotations_include_dotted_names() -> None:
    text = '@Suppress("x") @foo.bar fun f() {}'
    spans = tokenize(text, KOTLIN)

    assert texts_of(text, spans, Category.ANNOTATION) == ["@Suppress", "@foo.bar"]


def test_python_rules_hash_comment_and_def_capture() -> None:
    text = "# if 1\ndef run():\n    return 'x'"
    spans = tokenize(text, PYTHON)

    assert texts_of(text, spans, Category.COMMENT) == ["# if 1"]
    assert texts_of(text, spans, Category.DECLARATION) == ["run"]
    assert texts_of(text, spans, Category.STRING) == ["'x'"]


def test_block_comment_is_matched_non_greedily() -> None:
    text = "/* a */ val x /* b */"
    spans = tokenize(text, KOTLIN)

    assert texts_of(text, spans, Category.COMMENT) == ["/* a */", "/* b */"]


def test_empty_text_and_empty_rules_produce_nothing() -> None:
    bare = RuleSet(name="bare", string_delimiters=())

    assert tokenize("", KOTLIN) == ()
    assert texts_of("if while", tokenize("if while", bare), Category.KEYWORD) == []


def test_resolve_runs_merges_adjacent_offsets() -> None:
    spans = [
        Span(Category.KEYWORD, 0, 3),
        Span(Category.COMMENT, 2, 6),
        Span(Category.COMMENT, 6, 8),
    ]

    assert resolve_runs(spans) == [
        Span(Category.KEYWORD, 0, 2),
        Span(Category.COMMENT, 2, 8),
    ]


def test_java_rules_cover_annotations_types_and_suffixed_numbers() -> None:
    text = '@Override\npublic class Main { String s = "x"; long n = 10L; /* c */ }'
    spans = tokenize(text, JAVA)

    assert texts_of(text, spans, Category.ANNOTATION) == ["@Override"]
    assert texts_of(text, spans, Category.DECLARATION) == ["Main"]
    assert texts_of(text, spans, Category.TYPE) == ["String"]
    assert texts_of(text, spans, Category.NUMBER) == ["10L"]
    assert texts_of(text, spans, Category.COMMENT) == ["/* c */"]
    assert texts_of(text, spans, Category.STRING) == ['"x"']
    assert {"public", "class", "long"} <= set(texts_of(text, spans, Category.KEYWORD))
