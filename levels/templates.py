"""Procedural bug templates, one list per language.

Every generator is a plain function of a ``random.Random`` instance and
returns a dict with ``code``, ``bug_line``, ``solution`` and
``explanation``. Variety comes from a fixed pool of variable names and
small integer literals, so any seed yields a valid snippet.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .models import Difficulty, Language

VARS = ["x", "y", "count", "index", "total", "score", "limit", "value", "result", "temp"]


def pick_var(rng: random.Random) -> str:
    return rng.choice(VARS)


def pick_int(rng: random.Random, low: int, high: int) -> int:
    """Inclusive on both ends."""
    return rng.randint(low, high)


@dataclass(frozen=True)
class BugTemplate:
    title: str
    description: str
    difficulty: Difficulty
    generate: Callable[[random.Random], dict]


def _snippet(code, bug_line, solution, explanation):
    return {
        "code": code,
        "bug_line": bug_line,
        "solution": solution,
        "explanation": explanation,
    }


# -----------------------------------------------------------------------------
# JavaScript / TypeScript
# -----------------------------------------------------------------------------
def _js_string_math(rng):
    v = pick_var(rng)
    val = pick_int(rng, 10, 99)
    return _snippet(
        f'const {v} = "{val}";\nconst res = {v} + 10;\nconsole.log(res); // Prints "{val}10"',
        2,
        f"const res = Number({v}) + 10;",
        "Adding a number to a string results in concatenation.",
    )


def _js_const_reassign(rng):
    v = pick_var(rng)
    first, second = pick_int(rng, 1, 10), pick_int(rng, 11, 20)
    return _snippet(
        f"const {v} = {first};\n{v} = {second};",
        2,
        f"let {v} = {first}; // declare with let so it can change",
        "Variables declared with 'const' cannot be reassigned. Use 'let'.",
    )


def _js_off_by_one(rng):
    size = pick_int(rng, 3, 6)
    items = ", ".join(str(n) for n in range(1, size + 1))
    return _snippet(
        f"const arr = [{items}];\nfor (let i = 0; i <= arr.length; i++) {{\n  console.log(arr[i]);\n}}",
        2,
        "for (let i = 0; i < arr.length; i++) {",
        "Arrays are 0-indexed. Condition should be i < arr.length.",
    )


def _ts_type_mismatch(rng):
    v = pick_var(rng)
    return _snippet(
        f'let {v}: number = {pick_int(rng, 1, 10)};\n{v} = "hello";',
        2,
        f"{v} = {pick_int(rng, 11, 20)};",
        "Cannot assign type 'string' to type 'number'.",
    )


def _ts_optional_property(rng):
    return _snippet(
        "interface Data { val?: string }\nfunction print(d: Data) {\n  console.log(d.val.length);\n}",
        3,
        "console.log(d.val?.length);",
        "Property 'val' is optional. Use optional chaining (?.) to access it safely.",
    )


# -----------------------------------------------------------------------------
# Python
# -----------------------------------------------------------------------------
def _py_string_concat(rng):
    v = pick_var(rng)
    return _snippet(
        f'{v} = {pick_int(rng, 1, 10)}\nprint("Value: " + {v})',
        2,
        f'print("Value: " + str({v}))',
        "Python is strongly typed. You must explicitly convert numbers to strings.",
    )


def _py_indentation(rng):
    return _snippet(
        'def run():\nprint("Running")',
        2,
        '  print("Running")',
        "Python relies on indentation. The function body must be indented.",
    )


def _py_mutable_default(rng):
    return _snippet(
        "def add(x, l=[]):\n  l.append(x)\n  return l",
        1,
        "def add(x, l=None):",
        "Do not use mutable objects as default arguments.",
    )


# -----------------------------------------------------------------------------
# C-family and JVM
# -----------------------------------------------------------------------------
def _cpp_missing_semicolon(rng):
    v = pick_var(rng)
    val = pick_int(rng, 1, 100)
    return _snippet(
        f"int main() {{\n  int {v} = {val}\n  return 0;\n}}",
        2,
        f"int {v} = {val};",
        "Statements in C++ must end with a semicolon.",
    )


def _cpp_integer_division(rng):
    return _snippet(
        "double res = 1 / 2;\nstd::cout << res;",
        1,
        "double res = 1.0 / 2.0;",
        "Integer division truncates decimals.",
    )


def _java_string_compare(rng):
    return _snippet(
        'String a = new String("test");\nif (a == "test") {\n  System.out.println("Match");\n}',
        2,
        'if (a.equals("test")) {',
        "Use .equals() for value comparison in Java, not ==.",
    )


def _java_null_pointer(rng):
    return _snippet(
        "String s = null;\nSystem.out.println(s.length());",
        2,
        "if (s != null) System.out.println(s.length());",
        "Cannot call method on null object.",
    )


def _csharp_case_sensitivity(rng):
    return _snippet(
        'Console.writeline("Hello");',
        1,
        'Console.WriteLine("Hello");',
        "C# is case sensitive. Use WriteLine.",
    )


def _csharp_null_check(rng):
    return _snippet(
        "string s = null;\nint l = s.Length;",
        2,
        "int? l = s?.Length;",
        "Use null conditional operator (?.).",
    )


def _kotlin_val_reassign(rng):
    v = pick_var(rng)
    return _snippet(
        f"val {v} = 5\n{v} = 10",
        2,
        f"var {v} = 5",
        "Use var for mutable variables.",
    )


def _kotlin_null_safety(rng):
    v = pick_var(rng)
    return _snippet(
        f"var {v}: String = null",
        1,
        f"var {v}: String? = null",
        "Non-nullable types cannot hold null.",
    )


def _scala_val_reassign(rng):
    v = pick_var(rng)
    return _snippet(
        f"val {v} = 1\n{v} = 2",
        2,
        f"var {v} = 1",
        "Use var for mutable variables.",
    )


def _scala_list_add(rng):
    return _snippet(
        "val l = List(1,2)\nl += 3",
        2,
        "val l2 = l :+ 3",
        "List is immutable. Create a new list.",
    )


# -----------------------------------------------------------------------------
# Systems languages
# -----------------------------------------------------------------------------
def _rust_immutability(rng):
    v = pick_var(rng)
    return _snippet(
        f"let {v} = 10;\n{v} = 20;",
        1,
        f"let mut {v} = 10;",
        "Variables are immutable by default in Rust.",
    )


def _rust_ownership(rng):
    return _snippet(
        'let s1 = String::from("hi");\nlet s2 = s1;\nprintln!("{}", s1);',
        3,
        'println!("{}", s2);',
        "s1 was moved to s2. s1 is invalid.",
    )


def _go_unused_var(rng):
    v = pick_var(rng)
    return _snippet(
        f"func main() {{\n  {v} := 10\n}}",
        2,
        f"_ = {v}",
        "Go does not allow unused variables.",
    )


def _go_assignment(rng):
    v = pick_var(rng)
    return _snippet(
        f"{v} := 10\n{v} := 20",
        2,
        f"{v} = 20",
        "Use = for assignment, := is for declaration.",
    )


def _swift_force_unwrap(rng):
    return _snippet(
        "var s: String? = nil\nprint(s!)",
        2,
        "if let v = s { print(v) }",
        "Force unwrapping nil causes a crash.",
    )


def _swift_let_reassign(rng):
    v = pick_var(rng)
    return _snippet(
        f"let {v} = 10\n{v} = 20",
        2,
        f"var {v} = 10",
        "Use var for variables that change.",
    )


# -----------------------------------------------------------------------------
# Scripting
# -----------------------------------------------------------------------------
def _php_missing_sigil(rng):
    v = pick_var(rng)
    return _snippet(
        f"{v} = 10;\necho ${v};",
        1,
        f"${v} = 10;",
        "Variables in PHP must start with $.",
    )


def _php_concat(rng):
    return _snippet(
        '$a = "Hello " + "World";',
        1,
        '$a = "Hello " . "World";',
        "PHP uses . for concatenation, not +.",
    )


def _ruby_concat(rng):
    age = pick_int(rng, 18, 65)
    return _snippet(
        f'puts "Age: " + {age}',
        1,
        f'puts "Age: " + {age}.to_s',
        "Explicitly convert numbers to string.",
    )


def _ruby_missing_end(rng):
    return _snippet(
        'if true\n  puts "ok"',
        2,
        "end",
        "Blocks must be closed with end.",
    )


# -----------------------------------------------------------------------------
# Markup
# -----------------------------------------------------------------------------
def _html_unclosed_tag(rng):
    return _snippet(
        "<div>\n  <p>Hello World\n</div>",
        2,
        "  <p>Hello World</p>",
        "Paragraph tag <p> must be closed with </p>.",
    )


def _html_closing_attribute(rng):
    return _snippet(
        '<a href="https://example.com">\n  Link\n</a href>',
        3,
        "</a>",
        "Closing tags do not contain attributes. Just use </a>.",
    )


def _css_missing_unit(rng):
    width = pick_int(rng, 5, 40) * 10
    return _snippet(
        f".box {{\n  width: {width};\n  height: 100px;\n}}",
        2,
        f"  width: {width}px;",
        "Non-zero values in CSS must have a unit (e.g., px, em, %).",
    )


def _css_invalid_property(rng):
    return _snippet(
        ".text {\n  text-color: red;\n}",
        2,
        "  color: red;",
        "The property to change text color is 'color', not 'text-color'.",
    )


E, M = Difficulty.EASY, Difficulty.MEDIUM

TEMPLATES: dict[Language, list[BugTemplate]] = {
    Language.JAVASCRIPT: [
        BugTemplate("String Math", "Addition behaving strangely.", E, _js_string_math),
        BugTemplate("Const Reassignment", "Cannot update variable.", E, _js_const_reassign),
        BugTemplate("Off By One", "Loop runs too many times.", E, _js_off_by_one),
    ],
    Language.TYPESCRIPT: [
        BugTemplate("Type Mismatch", "Type error on assignment.", E, _ts_type_mismatch),
        BugTemplate("Optional Property", "Object is possibly undefined.", M, _ts_optional_property),
    ],
    Language.PYTHON: [
        BugTemplate("String Concat", "TypeError: can only concatenate str to str.", E, _py_string_concat),
        BugTemplate("Indentation", "SyntaxError: unexpected indent.", E, _py_indentation),
        BugTemplate("Mutable Default", "List keeps growing.", M, _py_mutable_default),
    ],
    Language.CPP: [
        BugTemplate("Missing Semicolon", "Syntax error.", E, _cpp_missing_semicolon),
        BugTemplate("Integer Division", "Result is 0.", M, _cpp_integer_division),
    ],
    Language.JAVA: [
        BugTemplate("String Compare", "Comparison failed.", E, _java_string_compare),
        BugTemplate("Null Pointer", "Crash on null.", M, _java_null_pointer),
    ],
    Language.CSHARP: [
        BugTemplate("Case Sensitivity", "Method not found.", E, _csharp_case_sensitivity),
        BugTemplate("Null Check", "Object is null.", M, _csharp_null_check),
    ],
    Language.RUST: [
        BugTemplate("Immutability", "Cannot assign twice.", E, _rust_immutability),
        BugTemplate("Ownership", "Value moved.", M, _rust_ownership),
    ],
    Language.GO: [
        BugTemplate("Unused Var", "Compile error.", E, _go_unused_var),
        BugTemplate("Assignment", "Syntax error.", E, _go_assignment),
    ],
    Language.PHP: [
        BugTemplate("Missing Sigil", "Parse error.", E, _php_missing_sigil),
        BugTemplate("Concat", "Math instead of string.", E, _php_concat),
    ],
    Language.KOTLIN: [
        BugTemplate("Val Reassign", "Val cannot be reassigned.", E, _kotlin_val_reassign),
        BugTemplate("Null Safety", "Type mismatch.", E, _kotlin_null_safety),
    ],
    Language.SCALA: [
        BugTemplate("Val Reassign", "Reassignment to val.", E, _scala_val_reassign),
        BugTemplate("List Add", "Immutable list.", M, _scala_list_add),
    ],
    Language.SWIFT: [
        BugTemplate("Force Unwrap", "Fatal error.", E, _swift_force_unwrap),
        BugTemplate("Let Reassign", "Constant mutation.", E, _swift_let_reassign),
    ],
    Language.RUBY: [
        BugTemplate("Concat", "Type error.", E, _ruby_concat),
        BugTemplate("Missing End", "Syntax error.", E, _ruby_missing_end),
    ],
    Language.HTML: [
        BugTemplate("Unclosed Tag", "Breaking the layout.", E, _html_unclosed_tag),
        BugTemplate("Invalid Attribute", "Link not working.", E, _html_closing_attribute),
    ],
    Language.CSS: [
        BugTemplate("Missing Unit", "Layout ignored.", E, _css_missing_unit),
        BugTemplate("Invalid Property", "Text color not changing.", E, _css_invalid_property),
    ],
}

# Languages listed here borrow FALLBACK_LANGUAGE's templates on purpose.
FALLBACK_LANGUAGE = Language.JAVASCRIPT
USES_FALLBACK: frozenset[Language] = frozenset()


def _check_coverage():
    if not TEMPLATES.get(FALLBACK_LANGUAGE):
        raise RuntimeError(f"fallback language {FALLBACK_LANGUAGE.value} has no templates")
    missing = [
        lang.value for lang in Language
        if lang not in TEMPLATES and lang not in USES_FALLBACK
    ]
    if missing:
        raise RuntimeError(f"no bug templates registered for: {', '.join(missing)}")


_check_coverage()


def templates_for(language: Language) -> list[BugTemplate]:
    """Templates for ``language``, or the fallback set for opted-in languages."""
    if language in TEMPLATES:
        return TEMPLATES[language]
    if language in USES_FALLBACK:
        return TEMPLATES[FALLBACK_LANGUAGE]
    raise KeyError(language)
