"""Skill taxonomy used for assessment and mastery tracking.

Skills are grouped into eight dimensions. The taxonomy is static and loaded
once at import time; nothing mutates it at runtime.
"""

from types import MappingProxyType

from intake_engine.domain.entities import DimensionConfig, SkillTag
from intake_engine.domain.entities.skills import SkillDimension
from intake_engine.domain.errors import DimensionNotFoundError, SkillNotFoundError


# =============================================================================
# Dimensions
# =============================================================================

DIMENSIONS: tuple[DimensionConfig, ...] = (
    DimensionConfig(
        key="programming_fundamentals",
        label="Programming Fundamentals",
        description="Core programming concepts: variables, data types, control flow, functions, data structures",
        order=1,
    ),
    DimensionConfig(
        key="web_foundations",
        label="Web Foundations",
        description="HTML structure, CSS styling, responsive design, accessibility basics",
        order=2,
    ),
    DimensionConfig(
        key="javascript",
        label="JavaScript/TypeScript",
        description="JS language features, DOM manipulation, async programming, TypeScript",
        order=3,
    ),
    DimensionConfig(
        key="backend",
        label="Backend Fundamentals",
        description="APIs, databases, server-side logic, authentication, deployment",
        order=4,
    ),
    DimensionConfig(
        key="dev_practices",
        label="Developer Practices",
        description="Git, testing, debugging, code organization, documentation",
        order=5,
    ),
    DimensionConfig(
        key="system_thinking",
        label="System Thinking",
        description="Architecture, problem decomposition, tradeoffs, scalability considerations",
        order=6,
    ),
    DimensionConfig(
        key="design",
        label="Design Sense",
        description="Visual hierarchy, layout, typography, color, UX basics",
        order=7,
    ),
    DimensionConfig(
        key="meta",
        label="Meta Skills",
        description="Learning ability, explanation clarity, problem-solving approach, self-assessment accuracy",
        order=8,
    ),
)


def _tag(
    key: str,
    dimension: SkillDimension,
    label: str,
    description: str,
    weight: float,
    *prerequisites: str,
) -> SkillTag:
    return SkillTag(
        key=key,
        dimension=dimension,
        label=label,
        description=description,
        weight=weight,
        prerequisites=frozenset(prerequisites),
    )


# =============================================================================
# Skill tags
# =============================================================================

SKILL_TAGS: tuple[SkillTag, ...] = (
    # Programming fundamentals
    _tag("prog_variables", "programming_fundamentals", "Variables & Data Types",
         "Understanding variables, primitive types, type coercion", 1.0),
    _tag("prog_operators", "programming_fundamentals", "Operators & Expressions",
         "Arithmetic, comparison, logical operators, expressions", 0.8,
         "prog_variables"),
    _tag("prog_control_flow", "programming_fundamentals", "Control Flow",
         "Conditionals (if/else, switch), loops (for, while)", 1.0,
         "prog_operators"),
    _tag("prog_functions", "programming_fundamentals", "Functions",
         "Function declaration, parameters, return values, scope", 1.0,
         "prog_control_flow"),
    _tag("prog_arrays", "programming_fundamentals", "Arrays & Lists",
         "Array creation, indexing, iteration, common methods", 1.0,
         "prog_functions"),
    _tag("prog_objects", "programming_fundamentals", "Objects & Maps",
         "Object literals, property access, iteration, nested structures", 1.0,
         "prog_arrays"),
    _tag("prog_strings", "programming_fundamentals", "String Manipulation",
         "String methods, template literals, parsing, formatting", 0.8,
         "prog_variables"),
    _tag("prog_algorithms", "programming_fundamentals", "Basic Algorithms",
         "Sorting, searching, simple recursion, time complexity awareness", 0.9,
         "prog_arrays", "prog_functions"),
    # Web foundations
    _tag("html_structure", "web_foundations", "HTML Structure",
         "Semantic HTML, document structure, common elements", 1.0),
    _tag("html_forms", "web_foundations", "HTML Forms",
         "Form elements, inputs, validation attributes, accessibility", 0.9,
         "html_structure"),
    _tag("html_semantics", "web_foundations", "Semantic Markup",
         "Choosing appropriate elements, ARIA basics, screen reader considerations", 0.8,
         "html_structure"),
    _tag("css_selectors", "web_foundations", "CSS Selectors",
         "Element, class, ID, combinators, specificity", 1.0),
    _tag("css_box_model", "web_foundations", "Box Model",
         "Margin, padding, border, sizing, display property", 1.0,
         "css_selectors"),
    _tag("css_layout", "web_foundations", "CSS Layout",
         "Flexbox, Grid, positioning, responsive patterns", 1.0,
         "css_box_model"),
    _tag("css_responsive", "web_foundations", "Responsive Design",
         "Media queries, mobile-first, fluid typography, viewport units", 0.9,
         "css_layout"),
    _tag("css_animations", "web_foundations", "CSS Animations",
         "Transitions, keyframes, transforms, performance", 0.6,
         "css_selectors"),
    # JavaScript / TypeScript
    _tag("js_dom", "javascript", "DOM Manipulation",
         "Selecting elements, modifying content, event handling", 1.0,
         "prog_functions", "html_structure"),
    _tag("js_events", "javascript", "Event Handling",
         "Event listeners, bubbling/capturing, delegation, custom events", 0.9,
         "js_dom"),
    _tag("js_async", "javascript", "Async Programming",
         "Promises, async/await, error handling, parallel execution", 1.0,
         "prog_functions"),
    _tag("js_fetch", "javascript", "Fetch & APIs",
         "HTTP requests, JSON handling, error states, loading states", 1.0,
         "js_async"),
    _tag("js_modules", "javascript", "Modules & Imports",
         "ES modules, import/export, module organization", 0.8,
         "prog_functions"),
    _tag("js_closures", "javascript", "Closures & Scope",
         "Lexical scope, closures, this binding, arrow functions", 0.8,
         "prog_functions"),
    _tag("js_array_methods", "javascript", "Array Methods",
         "map, filter, reduce, find, sort, chaining", 1.0,
         "prog_arrays", "prog_functions"),
    _tag("ts_basics", "javascript", "TypeScript Basics",
         "Type annotations, interfaces, type inference, generics basics", 0.9,
         "prog_objects", "js_modules"),
    _tag("ts_advanced", "javascript", "TypeScript Advanced",
         "Union/intersection types, utility types, discriminated unions", 0.7,
         "ts_basics"),
    # Backend
    _tag("backend_rest", "backend", "REST APIs",
         "HTTP methods, status codes, RESTful design, request/response", 1.0,
         "js_fetch"),
    _tag("backend_routing", "backend", "Server Routing",
         "Route handlers, params, query strings, middleware", 1.0,
         "backend_rest"),
    _tag("backend_database", "backend", "Database Basics",
         "CRUD operations, queries, relations, ORMs", 1.0,
         "prog_objects"),
    _tag("backend_auth", "backend", "Authentication",
         "Sessions, tokens, OAuth basics, password handling", 0.9,
         "backend_routing"),
    _tag("backend_validation", "backend", "Input Validation",
         "Server-side validation, sanitization, error responses", 0.8,
         "backend_routing"),
    _tag("backend_deployment", "backend", "Deployment Basics",
         "Environment variables, hosting, basic CI/CD concepts", 0.7,
         "backend_routing"),
    # Developer practices
    _tag("dev_git_basics", "dev_practices", "Git Basics",
         "Commits, branches, merging, basic workflow", 1.0),
    _tag("dev_git_collab", "dev_practices", "Git Collaboration",
         "Pull requests, code review, conflict resolution", 0.8,
         "dev_git_basics"),
    _tag("dev_testing", "dev_practices", "Testing",
         "Unit tests, test runners, basic TDD concepts", 0.9,
         "prog_functions"),
    _tag("dev_debugging", "dev_practices", "Debugging",
         "Console debugging, breakpoints, reading stack traces", 1.0,
         "prog_functions"),
    _tag("dev_code_org", "dev_practices", "Code Organization",
         "File structure, naming conventions, separation of concerns", 0.8,
         "prog_functions"),
    _tag("dev_documentation", "dev_practices", "Documentation",
         "README files, code comments, JSDoc/TSDoc", 0.6,
         "prog_functions"),
    # System thinking
    _tag("sys_decomposition", "system_thinking", "Problem Decomposition",
         "Breaking problems into smaller parts, identifying sub-tasks", 1.0),
    _tag("sys_data_flow", "system_thinking", "Data Flow",
         "Understanding how data moves through a system, state management", 1.0,
         "prog_functions"),
    _tag("sys_tradeoffs", "system_thinking", "Tradeoff Analysis",
         "Evaluating options, considering constraints, making decisions", 0.8),
    _tag("sys_architecture", "system_thinking", "Architecture Basics",
         "Component boundaries, API design, separation of concerns", 0.8,
         "sys_decomposition", "sys_data_flow"),
    _tag("sys_performance", "system_thinking", "Performance Awareness",
         "Identifying bottlenecks, caching concepts, optimization basics", 0.6,
         "sys_architecture"),
    # Design
    _tag("design_visual_hierarchy", "design", "Visual Hierarchy",
         "Size, contrast, spacing to guide attention", 1.0),
    _tag("design_layout", "design", "Layout Principles",
         "Alignment, proximity, whitespace, grids", 1.0),
    _tag("design_typography", "design", "Typography",
         "Font selection, sizing, line height, readability", 0.8),
    _tag("design_color", "design", "Color Usage",
         "Color harmony, contrast ratios, semantic colors", 0.8),
    _tag("design_ux_basics", "design", "UX Basics",
         "User flows, affordances, feedback, error states", 0.9),
    _tag("design_critique", "design", "Design Critique",
         "Evaluating designs, identifying improvements, vocabulary", 0.7),
    # Meta
    _tag("meta_self_assessment", "meta", "Self-Assessment",
         "Accurate evaluation of own abilities, identifying gaps", 0.8),
    _tag("meta_explanation", "meta", "Explanation Clarity",
         "Articulating concepts clearly, teaching ability", 0.9),
    _tag("meta_problem_solving", "meta", "Problem-Solving Approach",
         "Systematic approach, hypothesis testing, iteration", 1.0),
    _tag("meta_learning", "meta", "Learning Ability",
         "Adapting to new concepts, research skills, resourcefulness", 0.9),
    _tag("meta_persistence", "meta", "Persistence",
         "Working through difficulty, not giving up on hard problems", 0.7),
)

_SKILLS_BY_KEY = MappingProxyType({tag.key: tag for tag in SKILL_TAGS})
_DIMENSIONS_BY_KEY = MappingProxyType({d.key: d for d in DIMENSIONS})


# Challenge tags -> skill keys
TAG_TO_SKILL_MAP: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "arrays": ("prog_arrays", "js_array_methods"),
    "loops": ("prog_control_flow",),
    "recursion": ("prog_algorithms", "prog_functions"),
    "strings": ("prog_strings",),
    "objects": ("prog_objects",),
    "functions": ("prog_functions",),
    "sorting": ("prog_algorithms",),
    "searching": ("prog_algorithms",),
    "dom": ("js_dom",),
    "events": ("js_events",),
    "async": ("js_async",),
    "promises": ("js_async",),
    "fetch": ("js_fetch",),
    "api": ("js_fetch", "backend_rest"),
    "html": ("html_structure",),
    "css": ("css_selectors", "css_box_model"),
    "flexbox": ("css_layout",),
    "grid": ("css_layout",),
    "responsive": ("css_responsive",),
    "typescript": ("ts_basics",),
    "types": ("ts_basics",),
    "git": ("dev_git_basics",),
    "testing": ("dev_testing",),
    "debugging": ("dev_debugging",),
    "database": ("backend_database",),
    "rest": ("backend_rest",),
    "auth": ("backend_auth",),
})


# =============================================================================
# Lookups
# =============================================================================


def get_skills_by_dimension(dimension: str) -> list[SkillTag]:
    """Get all skill tags in a dimension, in taxonomy order."""
    return [tag for tag in SKILL_TAGS if tag.dimension == dimension]


def get_skill_by_key(key: str) -> SkillTag | None:
    return _SKILLS_BY_KEY.get(key)


def require_skill(key: str) -> SkillTag:
    """Get a skill tag or raise SkillNotFoundError."""
    tag = _SKILLS_BY_KEY.get(key)
    if tag is None:
        raise SkillNotFoundError(message=f"Unknown skill: {key}", details={"skill_key": key})
    return tag


def get_dimension_by_key(key: str) -> DimensionConfig | None:
    return _DIMENSIONS_BY_KEY.get(key)


def require_dimension(key: str) -> DimensionConfig:
    """Get a dimension config or raise DimensionNotFoundError."""
    dimension = _DIMENSIONS_BY_KEY.get(key)
    if dimension is None:
        raise DimensionNotFoundError(message=f"Unknown dimension: {key}", details={"dimension": key})
    return dimension


def get_all_skill_keys() -> frozenset[str]:
    return frozenset(_SKILLS_BY_KEY)


def get_all_dimension_keys() -> list[str]:
    return [d.key for d in DIMENSIONS]


def map_tags_to_skill_keys(tags: list[str]) -> list[str]:
    """Convert challenge tags to skill keys.

    Tags that already are skill keys pass through; others go through
    TAG_TO_SKILL_MAP. Matching is case-insensitive and the result keeps
    first-seen order without duplicates.
    """
    skill_keys: dict[str, None] = {}
    for tag in tags:
        lower = tag.lower()
        if lower in _SKILLS_BY_KEY:
            skill_keys[lower] = None
            continue
        for key in TAG_TO_SKILL_MAP.get(lower, ()):
            skill_keys[key] = None
    return list(skill_keys)
