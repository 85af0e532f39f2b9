from typing import Tuple

# Order matters: rules are applied in this order.
DEFAULT_ENTRIES: Tuple[Tuple[str, str], ...] = (
    # basic I/O
    ("likho", "console.log"),
    # keywords
    ("agar", "if"),
    ("warna", "else"),
    ("jabtak", "while"),
    ("wapas", "return"),
    ("karo", "function"),
    # logical
    ("aur", "&&"),
    ("ya", "||"),
    ("nahin", "!"),
    # comparison
    ("barabar", "==="),
    ("bara", ">"),
    ("chhota", "<"),
    ("baraabar", ">="),
    ("chhotaabar", "<="),
    ("barabargay", "!=="),
    # declarations
    ("bolo", "let"),
    ("muqarrar", "const"),
    # literals
    ("seedha", "true"),
    ("ghalat", "false"),
    # loops
    ("ke_liye", "for"),
)
