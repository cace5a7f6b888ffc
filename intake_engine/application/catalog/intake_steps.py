"""Intake assessment step catalog.

The catalog is an immutable, order-sorted tuple of step definitions. Steps are
looked up by id; navigation helpers walk the total order defined by ``order``.
"""

from intake_engine.domain.entities.steps import (
    AnyStep,
    CodeReviewStep,
    CodeStep,
    CodeTestCase,
    DesignComparisonStep,
    DesignCritiqueStep,
    DesignOption,
    FieldOption,
    LevelMapping,
    McqOption,
    McqStep,
    MicroMcqBurstStep,
    MicroMcqQuestion,
    QuestionnaireField,
    QuestionnaireStep,
    ShortTextStep,
    SkillMapping,
    SkipCondition,
    SkipRule,
    StepKind,
    SummaryStep,
)


_ONE_TO_FIVE = {"1": 1, "2": 2, "3": 3, "4": 4, "5": 5}


def _options(*pairs: tuple[str, str]) -> tuple[FieldOption, ...]:
    return tuple(FieldOption(value=value, label=label) for value, label in pairs)


def _choices(correct: str, *pairs: tuple[str, str]) -> tuple[McqOption, ...]:
    return tuple(
        McqOption(id=option_id, text=text, is_correct=option_id == correct)
        for option_id, text in pairs
    )


def _slider(field_id: str, label: str, skill_key: str) -> QuestionnaireField:
    return QuestionnaireField(
        id=field_id,
        type="slider",
        label=label,
        required=True,
        min=1,
        max=5,
        skill_mapping=SkillMapping(skill_key=skill_key, value_to_confidence=_ONE_TO_FIVE),
    )


# =============================================================================
# Section 0: level qualification
# =============================================================================

_LEVEL_QUALIFICATION: tuple[AnyStep, ...] = (
    QuestionnaireStep(
        id="level_self_prediction",
        title="Your Experience Level",
        description="Help us understand where you are in your coding journey.",
        order=1,
        estimated_minutes=0.5,
        fields=(
            QuestionnaireField(
                id="predicted_level",
                type="select",
                label="How would you describe your current programming experience?",
                description="This helps us tailor the assessment to your level.",
                required=True,
                options=_options(
                    ("complete_beginner", "Complete beginner - I've never written code"),
                    ("beginner", "Beginner - Some familiarity with coding concepts"),
                    ("intermediate", "Intermediate - I've built small apps or projects"),
                    ("advanced", "Advanced - Comfortable with React/backend development"),
                    ("professional", "Professional developer - Working in the industry"),
                ),
                skill_mapping=SkillMapping(
                    skill_key="predicted_level",
                    value_to_confidence={
                        "complete_beginner": 1,
                        "beginner": 2,
                        "intermediate": 3,
                        "advanced": 4,
                        "professional": 5,
                    },
                ),
            ),
        ),
    ),
    MicroMcqBurstStep(
        id="quick_skill_probe",
        title="Quick Skill Check",
        description="Answer these 3 quick questions to help us calibrate your assessment.",
        order=2,
        estimated_minutes=1.5,
        skill_keys=("prog_variables", "css_layout", "backend_rest"),
        instructions="Answer all 3 questions. This helps us understand your baseline knowledge.",
        questions=(
            MicroMcqQuestion(
                id="probe_const",
                question="What does `const` prevent in JavaScript?",
                options=_choices(
                    "a",
                    ("a", "Reassignment"),
                    ("b", "Redeclaration"),
                    ("c", "Property mutation"),
                    ("d", "All of the above"),
                ),
                explanation=(
                    "const prevents reassignment of the variable binding, but doesn't "
                    "prevent mutation of object properties."
                ),
            ),
            MicroMcqQuestion(
                id="probe_flex",
                question="What does `flex: 1` do to an element?",
                options=_choices(
                    "b",
                    ("a", "Sets width to 100px"),
                    ("b", "Allows element to grow to fill available space"),
                    ("c", "Centers the text"),
                    ("d", "Sets the font size"),
                ),
                explanation=(
                    "flex: 1 is shorthand for flex-grow: 1, allowing the element to "
                    "expand and fill available space in a flex container."
                ),
            ),
            MicroMcqQuestion(
                id="probe_http",
                question="Which HTTP method is idempotent?",
                options=_choices(
                    "c",
                    ("a", "POST"),
                    ("b", "PATCH"),
                    ("c", "PUT"),
                    ("d", "None of the above"),
                ),
                explanation=(
                    "PUT is idempotent - making the same request multiple times produces "
                    "the same result. POST creates new resources each time."
                ),
            ),
        ),
        level_mapping=LevelMapping(beginner=1, intermediate=2, advanced=3),
    ),
)


# =============================================================================
# Section 1: background questionnaires
# =============================================================================

_QUESTIONNAIRES: tuple[AnyStep, ...] = (
    QuestionnaireStep(
        id="questionnaire_background",
        title="About You",
        description="Tell us about your background and experience with programming.",
        order=3,
        estimated_minutes=5,
        fields=(
            QuestionnaireField(
                id="programming_experience",
                type="select",
                label="How much programming experience do you have?",
                required=True,
                options=_options(
                    ("none", "No experience - complete beginner"),
                    ("self_taught_beginner", "Some self-taught (< 6 months)"),
                    ("self_taught_intermediate", "Self-taught (6+ months)"),
                    ("bootcamp", "Completed a bootcamp"),
                    ("cs_student", "CS student or graduate"),
                    ("professional", "Professional developer"),
                ),
            ),
            QuestionnaireField(
                id="technologies_used",
                type="multiselect",
                label="Which technologies have you used? (Select all that apply)",
                options=_options(
                    ("html_css", "HTML/CSS"),
                    ("javascript", "JavaScript"),
                    ("typescript", "TypeScript"),
                    ("react", "React"),
                    ("nodejs", "Node.js"),
                    ("python", "Python"),
                    ("databases", "Databases (SQL/NoSQL)"),
                    ("git", "Git/GitHub"),
                    ("other", "Other languages/frameworks"),
                ),
            ),
            QuestionnaireField(
                id="github_url",
                type="url",
                label="GitHub profile URL (optional)",
                description="We can analyze your public repos to better understand your experience.",
                placeholder="https://github.com/username",
            ),
            QuestionnaireField(
                id="learning_goal",
                type="select",
                label="What is your primary learning goal?",
                required=True,
                options=_options(
                    ("career_change", "Career change into tech"),
                    ("skill_upgrade", "Upgrade existing skills"),
                    ("freelance", "Freelance/contract work"),
                    ("side_projects", "Build side projects"),
                    ("startup", "Build a startup"),
                    ("curiosity", "General curiosity/learning"),
                ),
            ),
        ),
    ),
    QuestionnaireStep(
        id="questionnaire_confidence",
        title="Self-Assessment",
        description=(
            "Rate your confidence in the following areas "
            "(1 = no experience, 5 = very confident)."
        ),
        order=4,
        estimated_minutes=3,
        skill_keys=(
            "prog_variables", "prog_control_flow", "prog_functions", "prog_arrays",
            "html_structure", "css_layout",
            "js_dom", "js_async",
            "backend_rest", "backend_database",
            "dev_git_basics", "dev_debugging",
            "design_visual_hierarchy", "design_layout",
        ),
        fields=(
            _slider("confidence_programming",
                    "Programming basics (variables, loops, functions)",
                    "prog_fundamentals_aggregate"),
            _slider("confidence_html_css", "HTML & CSS", "web_foundations_aggregate"),
            _slider("confidence_javascript", "JavaScript", "javascript_aggregate"),
            _slider("confidence_backend", "Backend / APIs / Databases", "backend_aggregate"),
            _slider("confidence_git", "Git & version control", "dev_git_basics"),
            _slider("confidence_design", "UI/UX Design sense", "design_aggregate"),
        ),
    ),
    QuestionnaireStep(
        id="questionnaire_learning_style",
        title="Learning Preferences",
        description="Help us personalize your learning experience.",
        order=5,
        estimated_minutes=2,
        skill_keys=("meta_learning",),
        fields=(
            QuestionnaireField(
                id="learning_style",
                type="select",
                label="How do you prefer to learn new programming concepts?",
                required=True,
                options=_options(
                    ("videos", "Video tutorials and walkthroughs"),
                    ("reading", "Reading documentation and articles"),
                    ("projects", "Building projects hands-on"),
                    ("ai_assisted", "AI-assisted Q&A and exploration"),
                    ("mixed", "A mix of all approaches"),
                ),
                skill_mapping=SkillMapping(skill_key="meta_learning"),
            ),
            QuestionnaireField(
                id="weekly_hours",
                type="select",
                label="How many hours per week can you commit to learning?",
                required=True,
                options=_options(
                    ("under_5", "Less than 5 hours"),
                    ("5_10", "5-10 hours"),
                    ("10_20", "10-20 hours"),
                    ("20_plus", "20+ hours (intensive study)"),
                ),
            ),
            QuestionnaireField(
                id="explanation_preference",
                type="select",
                label="Do you prefer detailed explanations or concise summaries?",
                required=True,
                options=_options(
                    ("detailed", "Detailed explanations with examples"),
                    ("concise", "Concise summaries, I'll dive deeper when needed"),
                    ("balanced", "A balance of both"),
                ),
            ),
        ),
    ),
)


# =============================================================================
# Section 2: multiple choice
# =============================================================================

_PERFECT_PROBE = SkipRule(
    depends_on_step_id="quick_skill_probe",
    condition=SkipCondition.SCORE_GT,
    value=3,
)

_MCQS: tuple[AnyStep, ...] = (
    McqStep(
        id="mcq_variables",
        title="Programming Concepts",
        description="Answer this question about variables and data types.",
        order=6,
        estimated_minutes=1,
        skill_keys=("prog_variables",),
        skip_rules=_PERFECT_PROBE,
        difficulty="beginner",
        question=(
            "What will be the value of `result` after this code runs?\n\n"
            "```javascript\nlet x = 5;\nlet y = \"3\";\nlet result = x + y;\n```"
        ),
        options=_choices(
            "b",
            ("a", "8 (number)"),
            ("b", "\"53\" (string)"),
            ("c", "\"35\" (string)"),
            ("d", "Error"),
        ),
        explanation=(
            "When you add a number and a string in JavaScript, the number is converted "
            "to a string and concatenated. So 5 + \"3\" = \"53\"."
        ),
    ),
    McqStep(
        id="mcq_arrays",
        title="Arrays",
        description="Answer this question about array methods.",
        order=7,
        estimated_minutes=1,
        skill_keys=("prog_arrays", "js_array_methods"),
        skip_rules=_PERFECT_PROBE,
        difficulty="beginner",
        question=(
            "Which array method would you use to create a new array with only the "
            "even numbers from `[1, 2, 3, 4, 5, 6]`?"
        ),
        options=_choices(
            "b",
            ("a", "map()"),
            ("b", "filter()"),
            ("c", "reduce()"),
            ("d", "forEach()"),
        ),
        explanation=(
            "filter() creates a new array with elements that pass a test. map() "
            "transforms each element, reduce() accumulates values, and forEach() just "
            "iterates without returning a new array."
        ),
    ),
    McqStep(
        id="mcq_functions",
        title="Functions",
        description="Answer this question about function scope.",
        order=8,
        estimated_minutes=1,
        skill_keys=("prog_functions", "js_closures"),
        difficulty="intermediate",
        question=(
            "What will this code output?\n\n```javascript\nfunction outer() {\n"
            "  let count = 0;\n  return function inner() {\n    count++;\n"
            "    return count;\n  };\n}\n\nconst counter = outer();\n"
            "console.log(counter());\nconsole.log(counter());\n```"
        ),
        options=_choices(
            "b",
            ("a", "1, 1"),
            ("b", "1, 2"),
            ("c", "0, 1"),
            ("d", "undefined, undefined"),
        ),
        explanation=(
            "This demonstrates closures. The inner function \"closes over\" the count "
            "variable, maintaining its value between calls. Each call to counter() "
            "increments and returns the count."
        ),
    ),
    McqStep(
        id="mcq_async",
        title="Async Programming",
        description="Answer this question about asynchronous JavaScript.",
        order=9,
        estimated_minutes=1,
        skill_keys=("js_async",),
        difficulty="intermediate",
        question=(
            "What is the output order of this code?\n\n```javascript\n"
            "console.log(\"1\");\nsetTimeout(() => console.log(\"2\"), 0);\n"
            "Promise.resolve().then(() => console.log(\"3\"));\nconsole.log(\"4\");\n```"
        ),
        options=_choices(
            "c",
            ("a", "1, 2, 3, 4"),
            ("b", "1, 4, 2, 3"),
            ("c", "1, 4, 3, 2"),
            ("d", "1, 3, 4, 2"),
        ),
        explanation=(
            "Synchronous code runs first (1, 4). Then microtasks (Promises) run before "
            "macrotasks (setTimeout), so 3 comes before 2."
        ),
    ),
    McqStep(
        id="mcq_css_layout",
        title="CSS Layout",
        description="Answer this question about CSS Flexbox.",
        order=10,
        estimated_minutes=1,
        skill_keys=("css_layout",),
        difficulty="beginner",
        question=(
            "Which CSS property would you use to center a flex item both horizontally "
            "and vertically within its container?"
        ),
        options=_choices(
            "c",
            ("a", "text-align: center; vertical-align: middle;"),
            ("b", "margin: auto;"),
            ("c", "justify-content: center; align-items: center;"),
            ("d", "position: absolute; top: 50%; left: 50%;"),
        ),
        explanation=(
            "In Flexbox, justify-content controls the main axis (horizontal by default) "
            "and align-items controls the cross axis (vertical by default). Setting both "
            "to center perfectly centers the item."
        ),
    ),
    McqStep(
        id="mcq_html_semantics",
        title="HTML Semantics",
        description="Answer this question about semantic HTML.",
        order=11,
        estimated_minutes=1,
        skill_keys=("html_semantics", "html_structure"),
        difficulty="beginner",
        question="Which is the most semantically appropriate way to mark up a navigation menu?",
        options=_choices(
            "b",
            ("a", "<div class=\"nav\"><div class=\"nav-item\">Home</div></div>"),
            ("b", "<nav><ul><li><a href=\"/\">Home</a></li></ul></nav>"),
            ("c", "<span class=\"navigation\">Home | About | Contact</span>"),
            ("d", "<p><a href=\"/\">Home</a> <a href=\"/about\">About</a></p>"),
        ),
        explanation=(
            "The <nav> element semantically indicates navigation, <ul>/<li> properly "
            "represents a list of links, and <a> elements make them clickable. This "
            "helps screen readers and SEO."
        ),
    ),
    McqStep(
        id="mcq_git_basics",
        title="Git Basics",
        description="Answer this question about Git version control.",
        order=12,
        estimated_minutes=1,
        skill_keys=("dev_git_basics",),
        difficulty="beginner",
        question="What does `git add .` do?",
        options=_choices(
            "b",
            ("a", "Commits all files with the message \".\""),
            ("b", "Stages all modified and untracked files"),
            ("c", "Pushes changes to GitHub"),
            ("d", "Reverts the last commit"),
        ),
        explanation=(
            "git add . stages all changes (modified, new, deleted files) in the current "
            "directory and subdirectories. It prepares them for the next commit but "
            "doesn't actually commit them."
        ),
    ),
    McqStep(
        id="mcq_dom",
        title="DOM Manipulation",
        description="Answer this question about working with the DOM.",
        order=13,
        estimated_minutes=1,
        skill_keys=("js_dom",),
        difficulty="beginner",
        question="What does `document.querySelector('.btn')` return?",
        options=_choices(
            "b",
            ("a", "A NodeList of all matching elements"),
            ("b", "The first matching element"),
            ("c", "All matching elements as an array"),
            ("d", "Throws an error if no element found"),
        ),
        explanation=(
            "querySelector returns the first element matching the CSS selector, or null "
            "if none found. Use querySelectorAll to get all matching elements as a "
            "NodeList."
        ),
    ),
    McqStep(
        id="mcq_responsive",
        title="Responsive Design",
        description="Answer this question about responsive CSS.",
        order=14,
        estimated_minutes=1,
        skill_keys=("css_responsive",),
        skip_rules=SkipRule(
            depends_on_step_id="mcq_css_layout",
            condition=SkipCondition.CORRECT,
        ),
        difficulty="beginner",
        question="Which media query targets screens smaller than 600px?",
        options=_choices(
            "b",
            ("a", "@media (width < 600px)"),
            ("b", "@media (max-width: 600px)"),
            ("c", "@media mobile"),
            ("d", "@media screen-small"),
        ),
        explanation=(
            "max-width: 600px applies styles when the viewport is 600px or smaller. This "
            "is the standard syntax supported in all browsers. The comparison syntax "
            "(width < 600px) is newer and has limited support."
        ),
    ),
    McqStep(
        id="mcq_architecture",
        title="Architecture Basics",
        description="Answer this question about system architecture.",
        order=15,
        estimated_minutes=1,
        skill_keys=("sys_architecture",),
        difficulty="intermediate",
        question="Which best describes \"client-server architecture\"?",
        options=_choices(
            "b",
            ("a", "Two users sharing files directly"),
            ("b", "Browser requests -> backend responds"),
            ("c", "Components communicating inside React"),
            ("d", "A database sending data directly to UI"),
        ),
        explanation=(
            "Client-server architecture is a model where clients (browsers, apps) send "
            "requests to a server, which processes them and sends responses. This is "
            "the foundation of web applications."
        ),
    ),
)


# =============================================================================
# Section 3: short text explanations
# =============================================================================

_SHORT_TEXT: tuple[AnyStep, ...] = (
    ShortTextStep(
        id="short_explain_callback",
        title="Explain a Concept",
        description="Explain in your own words.",
        order=16,
        estimated_minutes=3,
        skill_keys=("meta_explanation", "js_async", "prog_functions"),
        question=(
            "In your own words, explain what a \"callback function\" is and give a "
            "simple example of when you might use one."
        ),
        rubric="""Grade on 0-3 scale:
0: No understanding shown, wrong or irrelevant answer
1: Basic understanding - mentions that it's a function passed to another function, but explanation unclear or example missing/wrong
2: Good understanding - correctly explains callbacks are functions passed as arguments to be called later, gives a reasonable example (event handlers, array methods, async operations)
3: Excellent - clear explanation with correct terminology, good example, may mention async context or higher-order functions""",
        max_score=3,
        min_length=50,
        max_length=500,
        placeholder="A callback function is...",
    ),
    ShortTextStep(
        id="short_debug_approach",
        title="Debugging Approach",
        description="Describe your problem-solving process.",
        order=17,
        estimated_minutes=3,
        skill_keys=("meta_problem_solving", "dev_debugging"),
        question=(
            "You're working on a web page and a button click isn't working as expected. "
            "Describe the steps you would take to debug this issue."
        ),
        rubric="""Grade on 0-3 scale:
0: No useful debugging approach
1: Basic - mentions checking console or looking at code, but no systematic approach
2: Good - mentions multiple debugging steps: check console for errors, verify event listener is attached, use console.log/breakpoints, check if element exists
3: Excellent - systematic approach including: inspect element, check console errors, verify JS loaded, check event binding, use debugger/breakpoints, check for typos in selectors, test in isolation""",
        max_score=3,
        min_length=50,
        max_length=500,
        placeholder="First, I would...",
    ),
    ShortTextStep(
        id="short_explain_api",
        title="API Concepts",
        description="Explain a fundamental web development concept.",
        order=18,
        estimated_minutes=3,
        skill_keys=("backend_rest", "meta_explanation"),
        question=(
            "In your own words, explain what a REST API is and give one example of how "
            "a frontend might use it."
        ),
        rubric="""Grade on 0-3 scale:
0: No understanding shown, wrong or irrelevant answer, confuses API with something else
1: Basic understanding - knows API is for communication between systems but explanation is vague or example is weak
2: Good understanding - correctly explains REST API as a way for client/frontend to communicate with server/backend using HTTP methods, gives reasonable example (fetching user data, submitting forms)
3: Excellent - clear explanation of REST principles (stateless, resource-based, HTTP methods), good practical example with specific endpoint or data flow, may mention JSON, CRUD operations""",
        max_score=3,
        min_length=50,
        max_length=500,
        placeholder="A REST API is...",
    ),
)


# =============================================================================
# Section 4: coding challenges and code review
# =============================================================================

_CODE: tuple[AnyStep, ...] = (
    CodeStep(
        id="code_unique_sorted",
        title="Coding Challenge: Unique Sorted",
        description="Implement a function to process an array.",
        order=19,
        estimated_minutes=8,
        skill_keys=("prog_arrays", "prog_algorithms", "js_array_methods"),
        problem_description="""Implement a function `uniqueSorted` that takes an array of numbers and returns a new array containing only the unique values, sorted in ascending order.

**Examples:**
- `uniqueSorted([3, 1, 2, 1, 3])` -> `[1, 2, 3]`
- `uniqueSorted([5, 5, 5])` -> `[5]`
- `uniqueSorted([])` -> `[]`""",
        starter_code="function uniqueSorted(nums) {\n  // Your code here\n}",
        language="javascript",
        test_cases=(
            CodeTestCase(input="[3, 1, 2, 1, 3]", expected_output="[1,2,3]"),
            CodeTestCase(input="[5, 5, 5]", expected_output="[5]"),
            CodeTestCase(input="[]", expected_output="[]"),
            CodeTestCase(input="[1]", expected_output="[1]", is_hidden=True),
            CodeTestCase(input="[9, 1, 5, 1, 9, 5, 2]", expected_output="[1,2,5,9]", is_hidden=True),
        ),
        hints=(
            "Consider using a Set to remove duplicates",
            "Array.from() or spread operator can convert a Set back to an array",
            "The sort() method can sort numbers, but remember it sorts as strings by default",
        ),
    ),
    CodeStep(
        id="code_count_words",
        title="Coding Challenge: Word Count",
        description="Implement a function to count word occurrences.",
        order=20,
        estimated_minutes=8,
        skill_keys=("prog_strings", "prog_objects", "prog_algorithms"),
        problem_description="""Implement a function `countWords` that takes a string and returns an object with each word as a key and its count as the value. Words should be case-insensitive.

**Examples:**
- `countWords("hello world hello")` -> `{ hello: 2, world: 1 }`
- `countWords("The the THE")` -> `{ the: 3 }`
- `countWords("")` -> `{}`""",
        starter_code="function countWords(str) {\n  // Your code here\n}",
        language="javascript",
        test_cases=(
            CodeTestCase(input='"hello world hello"', expected_output='{"hello":2,"world":1}'),
            CodeTestCase(input='"The the THE"', expected_output='{"the":3}'),
            CodeTestCase(input='""', expected_output="{}"),
            CodeTestCase(input='"one"', expected_output='{"one":1}', is_hidden=True),
            CodeTestCase(input='"a b c a b a"', expected_output='{"a":3,"b":2,"c":1}', is_hidden=True),
        ),
        hints=(
            "Use toLowerCase() to handle case-insensitivity",
            "split() can break a string into an array of words",
            "Consider edge cases like empty strings",
        ),
    ),
    CodeStep(
        id="code_reverse_words",
        title="Coding Challenge: Reverse Words",
        description="Implement a function to reverse word order in a sentence.",
        order=21,
        estimated_minutes=8,
        skill_keys=("prog_strings", "prog_algorithms"),
        problem_description="""Implement a function `reverseWords` that reverses the order of words in a sentence.

**Examples:**
- `reverseWords("hello world")` -> `"world hello"`
- `reverseWords("a b c")` -> `"c b a"`
- `reverseWords("one")` -> `"one"`
- `reverseWords("")` -> `""`""",
        starter_code="function reverseWords(str) {\n  // Your code here\n}",
        language="javascript",
        test_cases=(
            CodeTestCase(input='"hello world"', expected_output='"world hello"'),
            CodeTestCase(input='"a b c"', expected_output='"c b a"'),
            CodeTestCase(input='""', expected_output='""'),
            CodeTestCase(input='"one"', expected_output='"one"', is_hidden=True),
            CodeTestCase(input='"the quick brown fox"', expected_output='"fox brown quick the"', is_hidden=True),
            CodeTestCase(input='"  spaced  out  "', expected_output='"out spaced"', is_hidden=True),
        ),
        hints=(
            "Use split() to break the string into an array of words",
            "reverse() can reverse an array",
            "join() can combine an array back into a string",
            "Consider handling extra whitespace with trim() and filter()",
        ),
    ),
    CodeReviewStep(
        id="code_review_component",
        title="Code Review",
        description="Review a React component and point out its bugs.",
        order=22,
        estimated_minutes=4,
        skill_keys=("js_dom", "js_events", "dev_debugging"),
        prompt="Review this React component. What bugs or bad practices do you see, and how would you fix them?",
        code="""function UserList() {
  const [users, setUsers] = useState([]);

  useEffect(() => {
    fetch('/api/users')
      .then((res) => res.text())
      .then((text) => setUsers(text));
    document.getElementById('count').innerText = users.length;
  });

  return (
    <div>
      <span id="count"></span>
      {users.map((u) => <button onclick={() => alert(u.name)}>{u.name}</button>)}
    </div>
  );
}""",
        language="javascript",
        rubric="""Grade on 0-3 scale:
0: No valid issues identified
1: Identifies 1 issue with a weak explanation
2: Identifies 2-3 real issues (missing dependency array, direct DOM access, onclick casing, response not parsed as JSON) with reasonable fixes
3: Identifies most issues, explains the consequences (infinite render loop, stale DOM writes) and proposes idiomatic React fixes""",
        max_score=3,
        looking_for=(
            "Missing dependency array causes the effect to run after every render (infinite loop)",
            "Direct DOM manipulation via document.getElementById instead of rendering state",
            "onclick should be onClick in JSX",
            "Response should be parsed with res.json() / JSON.parse, not stored as text",
            "List items are missing a key prop",
        ),
    ),
)


# =============================================================================
# Section 5: design assessment
# =============================================================================

_DESIGN: tuple[AnyStep, ...] = (
    DesignComparisonStep(
        id="design_comparison_1",
        title="Design Comparison",
        description="Compare two button designs and choose the better one.",
        order=23,
        estimated_minutes=2,
        skill_keys=("design_visual_hierarchy", "design_ux_basics"),
        prompt='Which button design is more effective for a primary call-to-action (like "Sign Up")?',
        option_a=DesignOption(
            description="A gray button with small, light gray text, no padding distinction from surrounding elements",
            inline_html='<button style="background: #e0e0e0; color: #999; padding: 8px 16px; border: none; font-size: 12px;">Sign Up</button>',
        ),
        option_b=DesignOption(
            description="A blue button with white text, clear padding, and slightly rounded corners",
            inline_html='<button style="background: #2563eb; color: white; padding: 12px 24px; border: none; border-radius: 6px; font-size: 16px; font-weight: 600;">Sign Up</button>',
        ),
        correct_option="B",
        explanation=(
            "Option B is more effective because it has high contrast (blue background "
            "with white text), appropriate size for a primary action, and clear visual "
            "weight that draws attention. Option A lacks contrast and visual prominence."
        ),
    ),
    DesignComparisonStep(
        id="design_comparison_2",
        title="Layout Comparison",
        description="Compare two card layouts.",
        order=24,
        estimated_minutes=2,
        skill_keys=("design_layout", "design_visual_hierarchy"),
        prompt="Which card layout better presents a blog post preview?",
        option_a=DesignOption(
            description="Title, date, and excerpt all in similar sized gray text, tightly packed together",
            inline_html="""<div style="padding: 12px; border: 1px solid #ddd; font-family: sans-serif;">
  <div style="color: #666; font-size: 14px;">How to Learn JavaScript</div>
  <div style="color: #666; font-size: 14px;">December 10, 2025</div>
  <div style="color: #666; font-size: 14px;">This article covers the basics of JavaScript programming and helps you get started with web development.</div>
</div>""",
        ),
        option_b=DesignOption(
            description="Large bold title, subtle date below, excerpt with comfortable spacing",
            inline_html="""<div style="padding: 20px; border: 1px solid #ddd; font-family: sans-serif;">
  <div style="color: #111; font-size: 20px; font-weight: 600; margin-bottom: 8px;">How to Learn JavaScript</div>
  <div style="color: #888; font-size: 13px; margin-bottom: 12px;">December 10, 2025</div>
  <div style="color: #444; font-size: 15px; line-height: 1.5;">This article covers the basics of JavaScript programming and helps you get started with web development.</div>
</div>""",
        ),
        correct_option="B",
        explanation=(
            "Option B creates clear visual hierarchy: the title stands out as the most "
            "important element, the date is de-emphasized as metadata, and the excerpt "
            "is readable with good line height. Spacing separates distinct pieces of "
            "information."
        ),
    ),
    DesignCritiqueStep(
        id="design_critique",
        title="Design Critique",
        description="Analyze a design and suggest improvements.",
        order=25,
        estimated_minutes=4,
        skill_keys=("design_critique", "design_visual_hierarchy", "design_layout", "meta_explanation"),
        prompt="Look at this login form design. What are 2-3 things you would improve and why?",
        design_description=(
            "A login form with: red background, yellow input fields, green submit button, "
            "all text in Comic Sans, no labels (just placeholder text), inputs and button "
            "are different widths, no spacing between elements."
        ),
        inline_html="""<div style="background: #ff4444; padding: 20px; width: 300px; font-family: 'Comic Sans MS', cursive;">
  <input style="background: #ffff00; border: none; padding: 8px; width: 200px; margin-bottom: 2px;" placeholder="email">
  <input style="background: #ffff00; border: none; padding: 8px; width: 180px; margin-bottom: 2px;" placeholder="password" type="password">
  <button style="background: #00ff00; border: none; padding: 8px; width: 250px;">login</button>
</div>""",
        rubric="""Grade on 0-3 scale:
0: No valid critique points, or completely off-topic
1: Identifies 1 issue but explanation is weak or suggestions unclear
2: Identifies 2-3 valid issues with reasonable explanations (color contrast, typography, spacing, alignment, accessibility, visual hierarchy)
3: Identifies multiple issues with clear explanations of WHY they're problems and specific improvement suggestions. May mention: color accessibility/contrast, professional typography, consistent alignment, proper spacing, label accessibility, visual harmony""",
        max_score=3,
        looking_for=(
            "Color contrast issues (red/yellow/green clash)",
            "Typography choice (Comic Sans unprofessional)",
            "Inconsistent widths/alignment",
            "Lack of spacing between elements",
            "No visible labels (accessibility issue)",
            "Visual hierarchy problems",
        ),
    ),
    DesignComparisonStep(
        id="design_typography",
        title="Typography Judgment",
        description="Evaluate text readability.",
        order=26,
        estimated_minutes=2,
        skill_keys=("design_typography",),
        prompt="Which body text style is more readable for long-form content?",
        option_a=DesignOption(
            description="Small text with tight line spacing",
            inline_html=(
                '<p style="font-family: sans-serif; font-size: 12px; line-height: 1.1; color: #333;">'
                "When building web applications, readability is crucial for user experience.</p>"
            ),
        ),
        option_b=DesignOption(
            description="Comfortable text size with generous line spacing",
            inline_html=(
                '<p style="font-family: sans-serif; font-size: 16px; line-height: 1.6; color: #333;">'
                "When building web applications, readability is crucial for user experience.</p>"
            ),
        ),
        correct_option="B",
        explanation=(
            "Option B uses a comfortable 16px font size and 1.6 line-height, which are "
            "widely accepted as optimal for body text readability. The tighter 12px/1.1 "
            "combination in Option A causes eye strain and makes it difficult to track "
            "lines."
        ),
    ),
    DesignCritiqueStep(
        id="design_ux_flow",
        title="UX Flow Evaluation",
        description="Analyze a user experience flow.",
        order=27,
        estimated_minutes=3,
        skill_keys=("design_ux_basics", "design_critique"),
        prompt=(
            "You see a checkout flow with 5 steps and mandatory account creation before "
            "purchase. What would you improve and why?"
        ),
        design_description="""E-commerce checkout flow:
Step 1: Select shipping method
Step 2: Create account (required)
Step 3: Enter shipping address
Step 4: Enter billing address
Step 5: Enter payment details
Step 6: Review and confirm""",
        rubric="""Grade on 0-3 scale:
0: No useful critique or completely off-topic
1: Identifies one issue (like account requirement) but doesn't explain the UX impact
2: Identifies 2-3 issues with reasonable explanations about user friction, dropout risk, or step consolidation
3: Identifies multiple issues with clear UX rationale: mentions cart abandonment risk, suggests guest checkout, recommends combining steps (shipping/billing), explains why fewer steps = higher conversion""",
        max_score=3,
        looking_for=(
            "Mandatory account creation as friction point",
            "Too many steps increase dropout/abandonment",
            "Guest checkout should be available",
            "Shipping and billing could be combined",
            "Progress indicator would help",
            "Auto-fill and smart defaults would reduce effort",
        ),
    ),
)


# =============================================================================
# Section 6: meta skills
# =============================================================================

_META: tuple[AnyStep, ...] = (
    ShortTextStep(
        id="meta_explain_thinking",
        title="Reflect on Your Learning",
        description="Share your thought process.",
        order=28,
        estimated_minutes=2,
        skill_keys=("meta_self_assessment", "meta_explanation"),
        question=(
            "Which question so far in this assessment felt the hardest, and what made "
            "it difficult for you?"
        ),
        rubric="""Grade on 0-3 scale:
0: No reflection, just says "none" or irrelevant response
1: Names a question but doesn't explain why it was hard
2: Names a specific question and gives a reasonable explanation of the challenge (unfamiliar concept, tricky wording, time pressure, etc.)
3: Thoughtful reflection that shows self-awareness about learning gaps, explains the specific challenge clearly, and may mention what they'd need to learn to do better""",
        max_score=3,
        min_length=30,
        max_length=400,
        placeholder="The hardest question for me was...",
    ),
    ShortTextStep(
        id="meta_ai_reasoning",
        title="AI in Learning",
        description="Share your perspective on AI-assisted learning.",
        order=29,
        estimated_minutes=2,
        skill_keys=("meta_learning",),
        question=(
            "How do you think AI tools (like ChatGPT or Copilot) should be used when "
            "learning to code? Give one benefit and one risk."
        ),
        rubric="""Grade on 0-3 scale:
0: No understanding of AI tools in learning context, or completely off-topic
1: Mentions benefit OR risk but not both, or gives superficial answer
2: Identifies both a benefit (faster answers, code examples, explanations) and a risk (dependency, not learning fundamentals, incorrect info) with brief explanations
3: Thoughtful analysis with nuanced benefit and risk, shows awareness of balanced approach""",
        max_score=3,
        min_length=50,
        max_length=400,
        placeholder="I think AI tools can be helpful for...",
    ),
    SummaryStep(
        id="summary",
        title="Assessment Complete",
        description="Review your skill profile and generate your personalized learning plan.",
        order=100,
        estimated_minutes=2,
        show_roadmap_generation=True,
    ),
)


INTAKE_STEPS: tuple[AnyStep, ...] = tuple(
    sorted(
        _LEVEL_QUALIFICATION + _QUESTIONNAIRES + _MCQS + _SHORT_TEXT + _CODE + _DESIGN + _META,
        key=lambda step: step.order,
    )
)


class StepCatalog:
    """Ordered, read-only view over a tuple of steps.

    The default instance wraps INTAKE_STEPS; tests build their own from
    smaller step lists.
    """

    def __init__(self, steps: tuple[AnyStep, ...] | list[AnyStep] = INTAKE_STEPS):
        ordered = tuple(sorted(steps, key=lambda step: step.order))
        if not ordered:
            raise ValueError("A step catalog needs at least one step")
        ids = [step.id for step in ordered]
        if len(set(ids)) != len(ids):
            raise ValueError("Step ids must be unique")
        orders = [step.order for step in ordered]
        if len(set(orders)) != len(orders):
            raise ValueError("Step order keys must be unique")
        self._steps = ordered
        self._index = {step.id: i for i, step in enumerate(ordered)}

    def get_ordered_steps(self) -> tuple[AnyStep, ...]:
        return self._steps

    def get_step_by_id(self, step_id: str) -> AnyStep | None:
        index = self._index.get(step_id)
        return None if index is None else self._steps[index]

    def index_of(self, step_id: str) -> int:
        """Position in total order, or -1 for an unknown step."""
        return self._index.get(step_id, -1)

    def get_first_step(self) -> AnyStep:
        return self._steps[0]

    def get_next_step(self, step_id: str) -> AnyStep | None:
        index = self._index.get(step_id)
        if index is None or index >= len(self._steps) - 1:
            return None
        return self._steps[index + 1]

    def get_previous_step(self, step_id: str) -> AnyStep | None:
        index = self._index.get(step_id)
        if index is None or index == 0:
            return None
        return self._steps[index - 1]

    def is_last_step(self, step_id: str) -> bool:
        return self._steps[-1].id == step_id

    def get_step_progress(self, step_id: str) -> int:
        """Percent complete when standing on a step (0 if unknown)."""
        index = self._index.get(step_id)
        if index is None:
            return 0
        return round_half_up((index + 1) / len(self._steps) * 100)

    def get_total_steps(self) -> int:
        return len(self._steps)

    def get_total_estimated_minutes(self) -> float:
        return sum(step.estimated_minutes for step in self._steps)

    def get_steps_by_kind(self, kind: StepKind) -> list[AnyStep]:
        return [step for step in self._steps if step.kind == kind]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like progress bars expect."""
    return int(value + 0.5)


DEFAULT_CATALOG = StepCatalog()


# Module-level helpers over the default catalog

get_ordered_steps = DEFAULT_CATALOG.get_ordered_steps
get_step_by_id = DEFAULT_CATALOG.get_step_by_id
get_first_step = DEFAULT_CATALOG.get_first_step
get_next_step = DEFAULT_CATALOG.get_next_step
get_previous_step = DEFAULT_CATALOG.get_previous_step
is_last_step = DEFAULT_CATALOG.is_last_step
get_step_progress = DEFAULT_CATALOG.get_step_progress
get_total_steps = DEFAULT_CATALOG.get_total_steps
get_total_estimated_minutes = DEFAULT_CATALOG.get_total_estimated_minutes
get_steps_by_kind = DEFAULT_CATALOG.get_steps_by_kind
