# =============================================================================
# test_scanner.py - Source Scanner Tests
# =============================================================================
# Tests for splitting assembly source into whitespace-delimited tokens.
#
# Test coverage includes:
#   - Comment stripping
#   - Whitespace handling (spaces, tabs, carriage returns)
#   - Line and column tracking
#   - Lazy, restartable token stream
# =============================================================================

from cpu8_asm.assembler.scanner import Scanner, Token, strip_comment


def texts(source: str) -> list[str]:
    """Helper returning just the token texts."""
    return [t.text for t in Scanner(source).tokenize()]


class TestTokens:
    """Test basic token splitting."""

    def test_empty_source(self):
        assert texts("") == []

    def test_whitespace_only(self):
        assert texts("   \t  \r\n\n") == []

    def test_instruction(self):
        assert texts("lda #$0a") == ["lda", "#$0a"]

    def test_operand_stays_one_token(self):
        assert texts("ldb ($3f),a") == ["ldb", "($3f),a"]

    def test_label_declaration(self):
        assert texts("loop: clc") == ["loop:", "clc"]

    def test_tabs_and_carriage_returns(self):
        assert texts("\tsta\t$20\r\n\trts\r\n") == ["sta", "$20", "rts"]

    def test_operand_on_next_line(self):
        """Tokens are a flat stream; lines do not end statements."""
        assert texts("jmp\nloop") == ["jmp", "loop"]


class TestComments:
    """Test comment handling."""

    def test_full_line_comment(self):
        assert texts("; just a comment") == []

    def test_trailing_comment(self):
        assert texts("rts ; return") == ["rts"]

    def test_comment_without_space(self):
        assert texts("rts;return") == ["rts"]

    def test_strip_comment(self):
        assert strip_comment("lda $10 ; a ; b") == "lda $10 "
        assert strip_comment("lda $10") == "lda $10"


class TestPositions:
    """Test line and column tracking."""

    def test_line_numbers(self):
        tokens = list(Scanner("sec\n\n; note\nrts").tokenize())
        assert [(t.text, t.line) for t in tokens] == [("sec", 1), ("rts", 4)]

    def test_columns(self):
        tokens = list(Scanner("  lda   #$0a").tokenize())
        assert tokens[0].column == 3
        assert tokens[1].column == 9

    def test_location(self):
        token = Token("lda", 2, 5, "prog.asm")
        assert str(token.location) == "prog.asm:2:5"

    def test_filename_propagates(self):
        tokens = list(Scanner("rts", "prog.asm").tokenize())
        assert tokens[0].filename == "prog.asm"

    def test_line_text(self):
        scanner = Scanner("sec\n  rts ; done\n")
        assert scanner.line_text(2) == "  rts ; done"
        assert scanner.line_text(0) == ""
        assert scanner.line_text(9) == ""
        assert scanner.line_count == 2

    def test_only_newline_ends_a_line(self):
        """Form feeds and vertical tabs are whitespace, not line breaks."""
        scanner = Scanner("sec\f; page\nnop\v rts\n")
        tokens = list(scanner.tokenize())
        assert [(t.text, t.line) for t in tokens] == [
            ("sec", 1), ("nop", 2), ("rts", 2),
        ]
        assert scanner.line_count == 2

    def test_crlf_line_text(self):
        scanner = Scanner("sec\r\nrts\r\n")
        assert scanner.line_text(1) == "sec"
        assert scanner.line_count == 2

    def test_no_trailing_newline(self):
        assert Scanner("sec\nrts").line_count == 2
        assert Scanner("").line_count == 0


class TestStream:
    """Test the token stream itself."""

    def test_tokenize_is_lazy(self):
        stream = Scanner("sec\nrts").tokenize()
        assert next(stream).text == "sec"

    def test_tokenize_restartable(self):
        scanner = Scanner("sec\nrts")
        assert list(scanner.tokenize()) == list(scanner.tokenize())
