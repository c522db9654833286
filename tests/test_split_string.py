"""Tests for the split_string assist and the split planner."""
from assistkit.assists.split_plan import needs_wrapper, plan_split
from assistkit.assists.split_string import SplitStringAssist
from assistkit.edit.text_range import TextRange
from assistkit.syntax.base import Language, Node, SyntaxKind
from assistkit.syntax.rust import RUST_SPLIT_STYLE
from helpers import check_assist, check_assist_not_applicable, check_assist_target

split = SplitStringAssist()


# ─── Applicability ───────────────────────────────────────────────────────────

class TestSplitStringApplicability:
    def test_target(self):
        check_assist_target(
            split,
            r'''
            fn f() {
                let s = "<|>random\nstring";
            }
            ''',
            r'"random\nstring"',
        )

    def test_not_applicable_before(self):
        check_assist_not_applicable(
            split,
            r'''
            fn f() {
                let s = <|>"random\nstring";
            }
            ''',
        )

    def test_not_applicable_after(self):
        check_assist_not_applicable(
            split,
            r'''
            fn f() {
                let s = "random\nstring"<|>;
            }
            ''',
        )

    def test_not_applicable_starting_before(self):
        check_assist_not_applicable(
            split,
            r'''
            fn f() {
                let s = <|>"random<|>\nstring";
            }
            ''',
        )

    def test_not_applicable_ending_after(self):
        check_assist_not_applicable(
            split,
            r'''
            fn f() {
                let s = "random\n<|>string"<|>;
            }
            ''',
        )

    def test_not_applicable_inside_escape(self):
        check_assist_not_applicable(
            split,
            r'''
            fn f() {
                let s = "random\<|>nstring";
            }
            ''',
        )

    def test_not_applicable_inside_hex_escape(self):
        check_assist_not_applicable(split, r'let s = "a\x4<|>1b";')

    def test_not_applicable_inside_unicode_escape(self):
        check_assist_not_applicable(split, r'let s = "a\u{1F<|>600}b";')

    def test_not_applicable_inside_line_continuation(self):
        check_assist_not_applicable(split, 'let s = "a\\\n  <|>  b";')

    def test_not_applicable_on_raw_string(self):
        check_assist_not_applicable(split, r'let s = r"random<|>string";')

    def test_not_applicable_on_byte_string(self):
        check_assist_not_applicable(split, r'let s = b"random<|>string";')

    def test_not_applicable_on_python(self):
        check_assist_not_applicable(split, 's = "random<|>string"\n', language=Language.PYTHON)


# ─── Edits ───────────────────────────────────────────────────────────────────

class TestSplitStringEdits:
    def test_simple_case(self):
        check_assist(
            split,
            r'''
            fn f() {
                let s = "random<|>\nstring";
            }
            ''',
            r'''
            fn f() {
                let s = concat!("random",<|> "\nstring");
            }
            ''',
        )

    def test_value_preserving_two_fragments(self):
        check_assist(
            split,
            'let s = "random<|>string";',
            'let s = concat!("random",<|> "string");',
        )

    def test_range_selected(self):
        check_assist(
            split,
            r'''
            fn f() {
                let s = "random<|>\n<|>string";
            }
            ''',
            r'''
            fn f() {
                let s = concat!("random", "\n",<|> "string");
            }
            ''',
        )

    def test_caret_right_after_opening_quote(self):
        check_assist(
            split,
            'let s = "<|>random";',
            'let s = concat!("",<|> "random");',
        )

    def test_add_concat_inside_other_macro(self):
        check_assist(
            split,
            r'''
            fn f() {
                let s = println!("random<|>\nstring");
            }
            ''',
            r'''
            fn f() {
                let s = println!(concat!("random",<|> "\nstring"));
            }
            ''',
        )

    def test_add_concat_inside_function_call(self):
        check_assist(
            split,
            'let s = format(x, "random<|>string");',
            'let s = format(x, concat!("random",<|> "string"));',
        )

    def test_split_after_hex_escape(self):
        check_assist(
            split,
            r'let s = "a\x41<|>b";',
            r'let s = concat!("a\x41",<|> "b");',
        )

    def test_add_concat_inside_plain_concat_function(self):
        check_assist(
            split,
            'let s = concat("ra<|>ndom");',
            'let s = concat(concat!("ra",<|> "ndom"));',
        )

    def test_keep_existing_concat(self):
        check_assist(
            split,
            r'''
            fn f() {
                let s: String = concat!("random<|>\n", "string").into();
            }
            ''',
            r'''
            fn f() {
                let s: String = concat!("random",<|> "\n", "string").into();
            }
            ''',
        )

    def test_keep_existing_concat_with_selection(self):
        check_assist(
            split,
            'concat!("a<|>bc<|>d")',
            'concat!("a", "bc",<|> "d")',
        )

    def test_top_level_string_gets_wrapper(self):
        check_assist(
            split,
            '"ab<|>cd"',
            'concat!("ab",<|> "cd")',
        )

    def test_non_ascii_content(self):
        check_assist(
            split,
            'let s = "héllo<|>wörld";',
            'let s = concat!("héllo",<|> "wörld");',
        )


# ─── Planner ─────────────────────────────────────────────────────────────────

class TestSplitPlanner:
    token = TextRange(10, 20)
    interior = TextRange(11, 19)

    def test_no_parent_needs_wrapper(self):
        plan = plan_split(self.token, self.interior, TextRange.empty(14), lambda: None, RUST_SPLIT_STYLE)
        assert plan.needs_wrapper
        assert plan.wrapper_open == "concat!("
        assert plan.wrapper_close == ")"
        assert plan.boundary_texts == ['", "']
        assert plan.split_offsets == [14]

    def test_concat_parent_reuses_call(self):
        parent = Node(SyntaxKind.MACRO_CALL, TextRange(0, 30), "concat")
        plan = plan_split(self.token, self.interior, TextRange(12, 15), lambda: parent, RUST_SPLIT_STYLE)
        assert not plan.needs_wrapper
        assert plan.wrapper_open is None
        assert plan.split_offsets == [12, 15]
        assert len(plan.boundary_texts) == 2

    def test_other_call_needs_wrapper(self):
        assert needs_wrapper(Node(SyntaxKind.MACRO_CALL, TextRange(0, 30), "println"), RUST_SPLIT_STYLE)
        assert needs_wrapper(Node(SyntaxKind.CALL, TextRange(0, 30), None), RUST_SPLIT_STYLE)

    def test_function_named_like_concat_needs_wrapper(self):
        assert needs_wrapper(Node(SyntaxKind.CALL, TextRange(0, 30), "concat"), RUST_SPLIT_STYLE)

    def test_non_call_parent_needs_wrapper(self):
        # A non-call node never counts as the concatenation call, whatever it carries.
        assert needs_wrapper(Node(SyntaxKind.DELIMITED, TextRange(0, 30), "concat"), RUST_SPLIT_STYLE)

    def test_selection_touching_quote_rejected(self):
        assert plan_split(self.token, self.interior, TextRange(10, 12), lambda: None, RUST_SPLIT_STYLE) is None
        assert plan_split(self.token, self.interior, TextRange(18, 20), lambda: None, RUST_SPLIT_STYLE) is None

    def test_inner_quote_boundaries_accepted(self):
        assert plan_split(self.token, self.interior, TextRange(11, 19), lambda: None, RUST_SPLIT_STYLE) is not None

    def test_missing_interior_rejected(self):
        assert plan_split(self.token, None, TextRange.empty(14), lambda: None, RUST_SPLIT_STYLE) is None

    def test_split_inside_escape_rejected(self):
        escapes = [TextRange(13, 15)]
        assert plan_split(
            self.token, self.interior, TextRange.empty(14), lambda: None, RUST_SPLIT_STYLE,
            escape_ranges=escapes,
        ) is None
        assert plan_split(
            self.token, self.interior, TextRange.empty(15), lambda: None, RUST_SPLIT_STYLE,
            escape_ranges=escapes,
        ) is not None
