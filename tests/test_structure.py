from models import LineRole
from structure import (
    build_toc,
    classify_line,
    extract_author,
    extract_book_info,
    format_chapter,
    format_title,
    is_all_caps_heading,
    is_leading_line_title,
    is_numbered_heading,
    is_subtitle,
    reconstruct,
    split_lines,
)

LONG_SENTENCE = "She walked along the river until the light began to fade."


def test_split_lines_trims_and_drops_blanks():
    assert split_lines("  one \n\n   \n two\n") == ["one", "two"]
    assert split_lines("") == []


def test_all_caps_line_with_space_is_title():
    assert is_all_caps_heading("CHAPTER ONE")
    assert classify_line("CHAPTER ONE", 5, ["x"] * 6) == LineRole.TITLE


def test_all_caps_requires_space_and_short_length():
    assert not is_all_caps_heading("PROLOGUE")
    assert not is_all_caps_heading("A " + "B" * 80)


def test_numbered_line_is_title_regardless_of_position():
    assert is_numbered_heading("1. Introduction")
    assert classify_line("1. Introduction", 7, []) == LineRole.TITLE
    assert not is_numbered_heading("1. " + "word " * 20)


def test_first_line_title_needs_no_terminal_punctuation():
    assert is_leading_line_title("The Long Road", 0)
    assert not is_leading_line_title("The Long Road", 1)
    for line in ("This is a sentence.", "What happened?", "Run!"):
        assert not is_leading_line_title(line, 0)
        assert classify_line(line, 0, [line]) != LineRole.TITLE


def test_sentence_at_start_can_still_be_title_via_caps_or_numbering():
    assert classify_line("THE END.", 0, []) == LineRole.TITLE
    assert classify_line("2. Second part.", 0, []) == LineRole.TITLE


def test_subtitle_rules():
    assert is_subtitle("A quiet morning")
    assert is_subtitle("Él volvió a casa")
    assert not is_subtitle("a quiet morning")
    assert not is_subtitle("A quiet morning.")
    assert not is_subtitle("A" * 100)
    assert classify_line("Ñandú y otros cuentos", 2, []) == LineRole.SUBTITLE


def test_short_body_line_is_discarded():
    assert classify_line("Short line.", 3, []) == LineRole.DISCARDED
    assert classify_line(LONG_SENTENCE, 3, []) == LineRole.BODY


def test_format_title_strips_enumeration():
    assert format_title("  12. The Return ") == "The Return"
    assert format_title("CHAPTER ONE") == "CHAPTER ONE"
    assert format_title("1.5 million") == "5 million"


def test_book_info_defaults_for_empty_input():
    info = extract_book_info([], "book")
    assert info.title == "book"
    assert info.author == ""


def test_book_info_author_label():
    info = extract_book_info(["Una historia\npor Gabriel García, 1967\nTexto"], "book")
    assert info.author == "Gabriel García"
    assert info.title == "Una historia"


def test_author_patterns_in_order():
    assert extract_author("Author: Jane Austen\nmore") == "Jane Austen"
    assert extract_author("Written in 1813\nJane Austen, novelist") == "Jane Austen"
    assert extract_author("Miguel Cervantes - Don Quijote") == "Miguel Cervantes"
    assert extract_author("nothing to see here") == ""


def test_book_title_strips_dash_prefix_and_skips_cover():
    assert extract_book_info(["Collection - The Real Title\nbody"], "book").title == "The Real Title"
    assert extract_book_info(["COVER\nsomething"], "book").title == "book"
    assert extract_book_info(["x" * 120], "book").title == "book"


def test_toc_ordinals_are_dense_and_skip_markers():
    blocks = [
        "PORTADA",
        "CHAPTER ONE\n" + LONG_SENTENCE,
        "   \n  ",
        "CRÉDITOS\nEditorial",
        "CHAPTER TWO\n" + LONG_SENTENCE,
    ]
    toc = build_toc(blocks)
    assert [e.ordinal for e in toc] == [1, 2]
    assert [e.target_index for e in toc] == [1, 4]
    assert [e.display_title for e in toc] == ["CHAPTER ONE", "CHAPTER TWO"]
    assert toc[0].anchor == "chapter-1"


def test_toc_falls_back_to_truncated_first_line():
    line = "it was a long and winding sentence that keeps going past fifty characters."
    toc = build_toc([line])
    assert toc[0].display_title == line[:50] + "..."

    short = "it was short."
    assert build_toc([short])[0].display_title == short


def test_toc_uses_formatted_numbered_title():
    toc = build_toc(["some intro line that is a sentence.\n3. The Storm\n" + LONG_SENTENCE])
    assert toc[0].display_title == "The Storm"


def test_format_chapter_skips_credits_and_empty_blocks():
    assert format_chapter("CREDITS\nCover art by someone", 0) is None
    assert format_chapter("Some text\nCRÉDITOS", 0) is None
    assert format_chapter("\n  \n", 0) is None


def test_format_chapter_structure():
    text = "\n".join([
        "CHAPTER ONE",
        LONG_SENTENCE,
        "Short line.",
        "PART TWO",
        "A Quiet Evening",
        "They talked for hours about everything and nothing at all.",
    ])
    chapter = format_chapter(text, 4)
    assert chapter.block_index == 4
    assert chapter.anchor == "chapter-4"
    assert chapter.title_line == "CHAPTER ONE"
    assert [(n.kind, n.text) for n in chapter.body_nodes] == [
        ("paragraph", LONG_SENTENCE),
        ("subtitle", "PART TWO"),
        ("subtitle", "A Quiet Evening"),
        ("paragraph", "They talked for hours about everything and nothing at all."),
    ]
    assert [n.is_drop_capped for n in chapter.paragraphs] == [True, False]


def test_format_chapter_without_title_drop_caps_first_paragraph_only():
    text = "\n".join([
        "this opening line is lowercase and ends with a period.",
        LONG_SENTENCE,
    ])
    chapter = format_chapter(text, 0)
    assert chapter.title_line is None
    assert [n.is_drop_capped for n in chapter.paragraphs] == [True, False]


def test_title_only_taken_from_first_three_lines():
    text = "\n".join([
        "it begins quietly with a sentence.",
        "and continues with another sentence.",
        "then a third one follows on.",
        "CHAPTER LATE",
    ])
    chapter = format_chapter(text, 0)
    assert chapter.title_line is None
    assert ("subtitle", "CHAPTER LATE") in [(n.kind, n.text) for n in chapter.body_nodes]


def test_end_to_end_reconstruction():
    blocks = [
        "MY BOOK TITLE\nJohn Smith,\nOnce upon a time in a land far away, things happened slowly.",
        "CHAPTER TWO\nAnd then more things happened over time.",
    ]
    result = reconstruct(blocks, "book", source_name="book.epub")

    assert result.info.title == "MY BOOK TITLE"
    assert result.info.author == "John Smith"
    assert [(e.ordinal, e.display_title) for e in result.toc] == [
        (1, "MY BOOK TITLE"),
        (2, "CHAPTER TWO"),
    ]
    assert [c.block_index for c in result.chapters] == [0, 1]
    assert [c.title_line for c in result.chapters] == ["MY BOOK TITLE", "CHAPTER TWO"]
    for chapter in result.chapters:
        assert sum(n.is_drop_capped for n in chapter.paragraphs) == 1
    assert result.chapters[0].body_nodes[0].kind == "subtitle"
    assert result.blocks == blocks


def test_toc_targets_match_chapter_indices():
    blocks = ["PORTADA", "CHAPTER ONE\n" + LONG_SENTENCE, "CREDITS", "1. Epilogue\n" + LONG_SENTENCE]
    result = reconstruct(blocks, "book")
    assert [e.target_index for e in result.toc] == [c.block_index for c in result.chapters]


def test_english_markers_only_match_whole_words():
    blocks = ["THE DISCOVERY\nThey found the hidden door behind the old bookcase at last."]
    result = reconstruct(blocks, "book")
    assert result.info.title == "THE DISCOVERY"
    assert [c.title_line for c in result.chapters] == ["THE DISCOVERY"]
    assert [e.display_title for e in result.toc] == ["THE DISCOVERY"]

    uncovered = "CHAPTER ONE\nNothing was UNCOVERED and nobody RECOVERED the CREDITSCARD."
    assert format_chapter(uncovered, 0) is not None
    assert format_chapter("THE COVER\nA picture of the ship.", 0) is None


def test_hyphen_author_pattern_matches_any_line_start():
    assert extract_author("una novela larga\nMiguel Cervantes - Don Quijote") == "Miguel Cervantes"
