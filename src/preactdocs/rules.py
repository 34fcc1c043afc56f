"""Ordered classification tables used by the parser, index and formatter.

Each table is a sequence of ``(predicate, result)`` rows evaluated top to
bottom. Predicates receive the lower-cased title and content of a section.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple

Predicate = Callable[[str, str], bool]

FENCED_BLOCK_RE = re.compile(
    r"^[ \t]*(?P<fence>```|~~~)[^\n]*\n.*?^[ \t]*(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


class Rule(NamedTuple):
    name: str
    matches: Predicate


# ---------------------------------------------------------------------------
# Category (first match wins)
# ---------------------------------------------------------------------------

DEFAULT_CATEGORY = "general"

CATEGORY_RULES: tuple[Rule, ...] = (
    Rule(
        "hooks",
        lambda title, content: "hook" in title or "usehook" in content or title.startswith("use"),
    ),
    Rule("components", lambda title, content: "component" in title),
    Rule("api", lambda title, content: "api" in title or "reference" in title),
    Rule(
        "guides",
        lambda title, content: any(
            word in title for word in ("guide", "tutorial", "getting started", "introduction")
        ),
    ),
    Rule("signals", lambda title, content: "signal" in title or "signal(" in content),
    Rule("routing", lambda title, content: "rout" in title or "<router" in content),
    Rule("testing", lambda title, content: "test" in title or "testing-library" in content),
    Rule(
        "typescript",
        lambda title, content: "typescript" in title or "```ts" in content,
    ),
)


def classify_category(title: str, content: str) -> str:
    """Return the first matching category, or ``"general"``."""
    title, content = title.lower(), content.lower()
    for rule in CATEGORY_RULES:
        if rule.matches(title, content):
            return rule.name
    return DEFAULT_CATEGORY


# ---------------------------------------------------------------------------
# Priority class (first match wins; lower number = more useful)
# ---------------------------------------------------------------------------

DEFAULT_PRIORITY = 5


class PriorityRule(NamedTuple):
    kind: str
    priority: int
    matches: Predicate


def _mentions(*words: str) -> Predicate:
    return lambda title, content: any(word in title for word in words)


PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule("api-reference", 4, _mentions("api", "reference")),
    PriorityRule("setup", 3, _mentions("installation", "configuration", "setup")),
    PriorityRule(
        "core-concept", 3, _mentions("component", "hooks", "signals", "forms", "state", "props")
    ),
    PriorityRule(
        "code-example", 2, lambda title, content: FENCED_BLOCK_RE.search(content) is not None
    ),
    PriorityRule(
        "tutorial", 1, _mentions("getting started", "tutorial", "hello world", "example")
    ),
)


def classify_priority(title: str, content: str) -> int:
    """Priority class of the first matching rule, or 5 if nothing matches."""
    title, content = title.lower(), content.lower()
    for rule in PRIORITY_RULES:
        if rule.matches(title, content):
            return rule.priority
    return DEFAULT_PRIORITY


# ---------------------------------------------------------------------------
# Related concepts (additive)
# ---------------------------------------------------------------------------

RELATED_RULES: tuple[tuple[Predicate, frozenset[str]], ...] = (
    (lambda title, content: "usestate" in title, frozenset({"useState", "useEffect", "hooks"})),
    (
        lambda title, content: "useeffect" in title,
        frozenset({"useEffect", "lifecycle", "useState"}),
    ),
    (lambda title, content: "component" in content, frozenset({"props", "state", "render"})),
    (
        lambda title, content: "signal" in content,
        frozenset({"reactive", "state management", "computed"}),
    ),
)


def related_concepts(title: str, content: str) -> tuple[str, ...]:
    title, content = title.lower(), content.lower()
    found: set[str] = set()
    for predicate, concepts in RELATED_RULES:
        if predicate(title, content):
            found |= concepts
    return tuple(sorted(found))


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

CONCEPT_VOCABULARY: tuple[str, ...] = (
    "hooks",
    "state",
    "props",
    "component",
    "jsx",
    "render",
    "effect",
    "context",
    "router",
    "signal",
    "fragment",
    "portal",
    "suspense",
    "lazy",
    "memo",
    "ref",
    "lifecycle",
    "event",
    "form",
    "testing",
    "typescript",
    "ssr",
)

_TITLE_TOKEN_RE = re.compile(r"[a-z]+")
_FUNCTION_TOKEN_RE = re.compile(r"\bfunction\b|\b[A-Za-z_$][\w$]*\(\)")
_API_MENTION_RE = re.compile(r"\bapi\b|\binterface\b", re.IGNORECASE)


def derive_tags(title: str, content: str) -> tuple[str, ...]:
    """Tags from title tokens, the concept vocabulary and function/API hints."""
    lowered = content.lower()
    tags = {token for token in _TITLE_TOKEN_RE.findall(title.lower()) if len(token) > 2}
    tags.update(term for term in CONCEPT_VOCABULARY if term in lowered)
    if _FUNCTION_TOKEN_RE.search(content) or "()" in title:
        tags.add("function")
    if _API_MENTION_RE.search(content):
        tags.add("api")
    return tuple(sorted(tags))


# ---------------------------------------------------------------------------
# Usage notes (formatter)
# ---------------------------------------------------------------------------

USAGE_NOTES: tuple[tuple[str, str], ...] = (
    (
        "usestate",
        "useState keeps local state in a function component; calling the setter "
        "schedules a re-render.",
    ),
    (
        "useeffect",
        "useEffect runs side effects after render; return a cleanup function to undo them "
        "before the next run or on unmount.",
    ),
    (
        "usecontext",
        "useContext reads the nearest Provider value and re-renders when that value changes.",
    ),
    ("useref", "useRef holds a mutable value or DOM node that survives re-renders."),
    ("usememo", "useMemo caches a computed value until one of its dependencies changes."),
    (
        "usecallback",
        "useCallback keeps a function identity stable between renders for its dependencies.",
    ),
    (
        "computed",
        "computed() derives a read-only signal that updates when the signals it reads change.",
    ),
    (
        "signal",
        "Signals hold reactive values; reading .value inside a component subscribes it "
        "to updates.",
    ),
    ("router", "Routing maps URLs to components; preact-iso ships a lightweight Router."),
    ("context", "Context passes data through the tree without threading props by hand."),
    ("fragment", "Fragments group children without adding an extra DOM node."),
    ("portal", "Portals render children into a DOM node outside the parent hierarchy."),
    ("suspense", "Suspense shows a fallback while lazy components or data are loading."),
    ("lazy", "lazy() defers loading a component until it is first rendered."),
    ("hydrate", "hydrate() attaches Preact to server-rendered markup instead of replacing it."),
    ("ssr", "Server-side rendering produces HTML on the server for faster first paint."),
    ("props", "Props are read-only inputs passed from a parent component."),
    ("render", "render() mounts a virtual DOM tree into a container element."),
    ("form", "Forms in Preact use controlled inputs bound to state via onInput."),
    ("test", "Component tests render into a real or simulated DOM and assert on output."),
)

CATEGORY_NOTES: dict[str, str] = {
    "hooks": "Hooks must be called at the top level of a function component, "
    "never inside conditions or loops.",
    "components": "Components are functions or classes that return virtual DOM from props.",
    "api": "This is an API reference entry; check the signature before use.",
    "guides": "Follow the guide step by step; later sections build on earlier ones.",
    "signals": "Signals update only the parts of the UI that read them.",
    "routing": "Routes are matched in order; place catch-all routes last.",
    "testing": "Tests should exercise components the way a user interacts with them.",
    "typescript": "Preact ships its own type definitions; no @types package is needed.",
}


def usage_note(query: str, title: str, category: str) -> str | None:
    """Return the first usage note whose key appears in the query or title.

    Falls back to a category-keyed note; ``None`` when nothing applies.
    """
    haystacks = (query.lower(), title.lower())
    for haystack in haystacks:
        for key, note in USAGE_NOTES:
            if key in haystack:
                return note
    return CATEGORY_NOTES.get(category)
