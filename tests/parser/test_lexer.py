from unipatch.lexer import LineType, classify, split_lines


def test_split_lines_drops_terminators_and_final_empty_line() -> None:
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\n\nb\n") == ["a", "", "b"]


def test_split_lines_normalizes_crlf() -> None:
    assert split_lines("--- a\r\n+++ b\r\n x\r\n") == ["--- a", "+++ b", " x"]
    # Only one trailing CR is a terminator
    assert split_lines(" x\r\r\n") == [" x\r"]


def test_split_lines_empty_input() -> None:
    assert split_lines("") == []


def test_old_header_requires_following_new_header() -> None:
    assert classify("--- a.txt", "+++ b.txt") == LineType.OLD_HEADER
    assert classify("--- a.txt", " context") == LineType.REMOVED
    assert classify("--- a.txt") == LineType.REMOVED


def test_classify_markers() -> None:
    assert classify("+++ b.txt") == LineType.NEW_HEADER
    assert classify("@@ -1,2 +1,2 @@") == LineType.HUNK_RANGE
    assert classify("+added") == LineType.ADDED
    assert classify("-removed") == LineType.REMOVED
    assert classify(" context") == LineType.CONTEXT
    assert classify("\\ No newline at end of file") == LineType.NO_NEWLINE_MARKER


def test_triple_markers_without_space_are_content() -> None:
    assert classify("---a;", "+++a;") == LineType.REMOVED
    assert classify("+++a;") == LineType.ADDED


def test_noise_lines() -> None:
    assert classify("diff --git a/x b/x") == LineType.NOISE
    assert classify("index abc123..def456 100644") == LineType.NOISE
    assert classify("") == LineType.NOISE
