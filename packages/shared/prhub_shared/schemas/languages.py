"""Programming languages a project can declare as its main language.

The order is the order shown in submission forms; lookups are case-sensitive.
"""

LANGUAGES: tuple[str, ...] = (
    "ABAP", "ActionScript", "Ada", "Apex", "AppleScript", "Arc",
    "Arduino", "ASP", "Assembly", "Augeas", "AutoHotkey", "Awk", "Bluespec",
    "Boo", "Bro", "C", "C#", "C++", "Ceylon", "Chisel", "CLIPS", "Clojure",
    "COBOL", "CoffeeScript", "ColdFusion", "Common Lisp", "Coq",
    "CSS", "D", "Dart", "DCPU-16 ASM", "DOT", "Dylan", "eC", "Ecl",
    "Eiffel", "Elixir", "Elm", "Emacs Lisp", "Erlang", "F#",
    "Factor", "Fancy", "Fantom", "Forth", "FORTRAN", "Go", "Gosu",
    "Groovy", "Haskell", "Haxe", "HTML", "Io", "Ioke", "J", "Java",
    "JavaScript", "Julia", "Kotlin", "Lasso", "LiveScript", "Logos",
    "Logtalk", "Lua", "M", "Markdown", "Matlab", "Max", "Mirah",
    "Monkey", "MoonScript", "Nemerle", "Nimrod", "Nu",
    "Objective-C", "Objective-J", "OCaml", "Omgrofl", "ooc", "Opa",
    "OpenEdge ABL", "Parrot", "Pascal", "Perl", "Perl 6", "PHP", "Pike",
    "PogoScript", "PowerShell", "Processing", "Prolog", "Puppet",
    "Pure Data", "Python", "R", "Racket", "Ragel in Ruby Host",
    "Rebol", "Rouge", "Ruby", "Rust", "Scala", "Scheme", "Scilab",
    "Self", "Shell", "Slash", "Smalltalk", "Squirrel",
    "Standard ML", "SuperCollider", "Swift", "Tcl", "Turing", "TXL",
    "TypeScript", "Vala", "Verilog", "VHDL", "VimL", "Visual Basic",
    "Volt", "wisp", "XC", "XML", "XProc", "XQuery", "XSLT", "Xtend",
)

LANGUAGE_SET: frozenset[str] = frozenset(LANGUAGES)


def is_language(value: object) -> bool:
    return isinstance(value, str) and value in LANGUAGE_SET
