from dir2context.chunking.classifier import SyntaxClassifier
from dir2context.chunking.grammars import JAVA, JAVASCRIPT, PYTHON
from dir2context.chunking.positions import SourceText
from dir2context.chunking.units import UnitKind


FUNCTION_SOURCE = """// Adds two numbers.
// Returns the sum.
function add(left, right = 1) {
  return left + right;
}
"""


def _function_tree(b, fake_node):
    first = b("comment", "// Adds two numbers.")
    second = b("comment", "// Returns the sum.")
    params = b(
        "formal_parameters",
        "(left, right = 1)",
        b("(", "(", named=False),
        b("identifier", "left"),
        b(",", ",", named=False),
        b("assignment_pattern", "right = 1"),
        b(")", ")", named=False),
    )
    function = b(
        "function_declaration",
        "function add(left, right = 1) {\n  return left + right;\n}",
        b("function", "function", named=False),
        b("identifier", "add"),
        params,
        b("statement_block", "{\n  return left + right;\n}"),
    )
    program = fake_node("program", (0, 0), (5, 0), [first, second, function])
    return program, function, first, second


def test_function_declaration_is_a_semantic_unit(node_builder, fake_node) -> None:
    b = node_builder(FUNCTION_SOURCE)
    program, function, first, _ = _function_tree(b, fake_node)
    classifier = SyntaxClassifier(JAVASCRIPT)

    assert classifier.is_semantic_unit(function)
    assert not classifier.is_semantic_unit(program)
    assert not classifier.is_semantic_unit(first)


def test_keyword_tokens_sharing_a_label_are_not_units(fake_node) -> None:
    classifier = SyntaxClassifier(PYTHON)
    keyword = fake_node("lambda", (0, 4), (0, 10), is_named=False)
    construct = fake_node("lambda", (0, 4), (0, 20), [keyword])

    assert classifier.is_semantic_unit(construct)
    assert not classifier.is_semantic_unit(keyword)


def test_declaration_name_parameters_and_kind(node_builder, fake_node) -> None:
    b = node_builder(FUNCTION_SOURCE)
    _, function, _, _ = _function_tree(b, fake_node)
    source = SourceText(FUNCTION_SOURCE)
    classifier = SyntaxClassifier(JAVASCRIPT)

    name_node = classifier.find_name_node(function)
    assert source.node_text(name_node) == "add"
    assert classifier.parameter_texts(function, source) == ["left", "right = 1"]
    assert classifier.refine_kind(function, source, name_node) is UnitKind.FUNCTION


def test_consecutive_line_comments_form_one_block(node_builder, fake_node) -> None:
    b = node_builder(FUNCTION_SOURCE)
    _, function, first, second = _function_tree(b, fake_node)

    assert SyntaxClassifier(JAVASCRIPT).find_leading_comment(function) == (first, second)


def test_comments_separated_by_a_blank_line_are_not_merged(node_builder, fake_node) -> None:
    source = "// License header.\n\n// Greets.\nfunction hi() {}\n"
    b = node_builder(source)
    header = b("comment", "// License header.")
    doc = b("comment", "// Greets.")
    function = b("function_declaration", "function hi() {}", b("identifier", "hi"))
    fake_node("program", (0, 0), (4, 0), [header, doc, function])

    assert SyntaxClassifier(JAVASCRIPT).find_leading_comment(function) == (doc, doc)


ARROW_SOURCE = """// Handles events.
const handler = (event) => {
  log(event);
};
items.map((x) => x * 2);
"""


def _arrow_tree(b, fake_node):
    comment = b("comment", "// Handles events.")
    bound_arrow = b(
        "arrow_function",
        "(event) => {\n  log(event);\n}",
        b("formal_parameters", "(event)", b("identifier", "event", nth=1)),
        b("=>", "=>", named=False),
        b("statement_block", "{\n  log(event);\n}"),
    )
    declarator = b(
        "variable_declarator",
        "handler = (event) => {\n  log(event);\n}",
        b("identifier", "handler"),
        b("=", "=", named=False),
        bound_arrow,
    )
    declaration = b(
        "lexical_declaration",
        "const handler = (event) => {\n  log(event);\n};",
        b("const", "const", named=False),
        declarator,
    )
    free_arrow = b(
        "arrow_function",
        "(x) => x * 2",
        b("formal_parameters", "(x)", b("identifier", "x")),
    )
    arguments = b("arguments", "((x) => x * 2)", free_arrow)
    call = b("call_expression", "items.map((x) => x * 2)", b("member_expression", "items.map"), arguments)
    fake_node("program", (0, 0), (5, 0), [comment, declaration, call])
    return comment, bound_arrow, free_arrow


def test_arrow_function_takes_its_name_from_the_binding(node_builder, fake_node) -> None:
    b = node_builder(ARROW_SOURCE)
    _, bound_arrow, _ = _arrow_tree(b, fake_node)
    source = SourceText(ARROW_SOURCE)
    classifier = SyntaxClassifier(JAVASCRIPT)

    assert source.node_text(classifier.find_name_node(bound_arrow)) == "handler"
    assert classifier.parameter_texts(bound_arrow, source) == ["event"]


def test_unbound_arrow_function_has_no_name(node_builder, fake_node) -> None:
    b = node_builder(ARROW_SOURCE)
    _, _, free_arrow = _arrow_tree(b, fake_node)

    assert SyntaxClassifier(JAVASCRIPT).find_name_node(free_arrow) is None


def test_comment_search_climbs_to_the_enclosing_statement(node_builder, fake_node) -> None:
    b = node_builder(ARROW_SOURCE)
    comment, bound_arrow, free_arrow = _arrow_tree(b, fake_node)
    classifier = SyntaxClassifier(JAVASCRIPT)

    assert classifier.find_leading_comment(bound_arrow) == (comment, comment)
    assert classifier.find_leading_comment(free_arrow) is None


def test_comment_above_a_multiline_binding_reaches_its_arrow(node_builder, fake_node) -> None:
    source = "// doubles\nconst double =\n  (x) => x * 2;\n"
    b = node_builder(source)
    comment = b("comment", "// doubles")
    arrow = b("arrow_function", "(x) => x * 2", b("formal_parameters", "(x)", b("identifier", "x")))
    declarator = b(
        "variable_declarator",
        "double =\n  (x) => x * 2",
        b("identifier", "double", nth=1),
        b("=", "=", named=False),
        arrow,
    )
    declaration = b(
        "lexical_declaration",
        "const double =\n  (x) => x * 2;",
        b("const", "const", named=False),
        declarator,
    )
    fake_node("program", (0, 0), (3, 0), [comment, declaration])

    assert SyntaxClassifier(JAVASCRIPT).find_leading_comment(arrow) == (comment, comment)


def test_comment_above_a_decorator_reaches_the_function(node_builder, fake_node) -> None:
    source = "# Adds one.\n@cache\ndef inc(x):\n    return x + 1\n"
    b = node_builder(source)
    comment = b("comment", "# Adds one.")
    function = b("function_definition", "def inc(x):\n    return x + 1", b("identifier", "inc"))
    decorated = b(
        "decorated_definition",
        "@cache\ndef inc(x):\n    return x + 1",
        b("decorator", "@cache"),
        function,
    )
    fake_node("module", (0, 0), (4, 0), [comment, decorated])

    assert SyntaxClassifier(PYTHON).find_leading_comment(function) == (comment, comment)


def test_outer_comment_stays_with_the_outer_function(node_builder, fake_node) -> None:
    source = "// Outer.\nfunction make() {\n  return () => 1;\n}\n"
    b = node_builder(source)
    comment = b("comment", "// Outer.")
    inner = b("arrow_function", "() => 1")
    statement = b("return_statement", "return () => 1;", b("return", "return", named=False), inner)
    body = b("statement_block", "{\n  return () => 1;\n}", b("{", "{", named=False), statement)
    outer = b("function_declaration", "function make() {\n  return () => 1;\n}", b("identifier", "make"), body)
    fake_node("program", (0, 0), (4, 0), [comment, outer])
    classifier = SyntaxClassifier(JAVASCRIPT)

    assert classifier.find_leading_comment(outer) == (comment, comment)
    assert classifier.find_leading_comment(inner) is None


CLASS_SOURCE = """/** Shape doc. */
class Shape {
  static create() { return new Shape(); }
  get area() { return 0; }
  set area(value) {}
  get() { return 1; }
  draw() {}
}
"""


def _class_tree(b, fake_node):
    methods = [
        b(
            "method_definition",
            "static create() { return new Shape(); }",
            b("static", "static", named=False),
            b("property_identifier", "create"),
        ),
        b(
            "method_definition",
            "get area() { return 0; }",
            b("get", "get", named=False),
            b("property_identifier", "area"),
        ),
        b(
            "method_definition",
            "set area(value) {}",
            b("set", "set", named=False),
            b("property_identifier", "area", nth=1),
            b("formal_parameters", "(value)", b("identifier", "value")),
        ),
        b(
            "method_definition",
            "get() { return 1; }",
            b("property_identifier", "get", nth=1),
        ),
        b("method_definition", "draw() {}", b("property_identifier", "draw")),
    ]
    body = b("class_body", "{\n  static", b("{", "{", named=False), *methods)
    comment = b("comment", "/** Shape doc. */")
    declaration = b("class_declaration", "class Shape {", b("identifier", "Shape", nth=1), body)
    fake_node("program", (0, 0), (8, 0), [comment, declaration])
    return methods


def test_method_kinds_are_refined(node_builder, fake_node) -> None:
    b = node_builder(CLASS_SOURCE)
    methods = _class_tree(b, fake_node)
    source = SourceText(CLASS_SOURCE)
    classifier = SyntaxClassifier(JAVASCRIPT)

    kinds = [
        classifier.refine_kind(method, source, classifier.find_name_node(method))
        for method in methods
    ]
    names = [source.node_text(classifier.find_name_node(method)) for method in methods]

    assert kinds == [
        UnitKind.STATIC_METHOD,
        UnitKind.GET_METHOD,
        UnitKind.SET_METHOD,
        UnitKind.METHOD,
        UnitKind.METHOD,
    ]
    assert names == ["create", "area", "area", "get", "draw"]


def test_class_comment_does_not_attach_to_members(node_builder, fake_node) -> None:
    b = node_builder(CLASS_SOURCE)
    methods = _class_tree(b, fake_node)

    assert SyntaxClassifier(JAVASCRIPT).find_leading_comment(methods[-1]) is None


JAVA_SOURCE = """class Calc {
    /** Adds. */
    public static int add(int a, int b) { return a + b; }
    Calc(String name) {}
}
"""


def test_java_static_modifier_and_constructor(node_builder, fake_node) -> None:
    b = node_builder(JAVA_SOURCE)
    comment = b("block_comment", "/** Adds. */")
    modifiers = b(
        "modifiers",
        "public static",
        b("public", "public", named=False),
        b("static", "static", named=False),
    )
    params = b(
        "formal_parameters",
        "(int a, int b)",
        b("(", "(", named=False),
        b("formal_parameter", "int a", nth=1),
        b(",", ",", named=False),
        b("formal_parameter", "int b"),
        b(")", ")", named=False),
    )
    method = b(
        "method_declaration",
        "public static int add(int a, int b) { return a + b; }",
        modifiers,
        b("integral_type", "int"),
        b("identifier", "add"),
        params,
    )
    constructor = b(
        "constructor_declaration",
        "Calc(String name) {}",
        b("identifier", "Calc", nth=1),
        b("formal_parameters", "(String name)", b("formal_parameter", "String name")),
    )
    body = b("class_body", "{\n    /**", comment, method, constructor)
    fake_node("program", (0, 0), (5, 0), [b("class_declaration", "class Calc {", body)])
    source = SourceText(JAVA_SOURCE)
    classifier = SyntaxClassifier(JAVA)

    assert classifier.refine_kind(method, source, classifier.find_name_node(method)) is UnitKind.STATIC_METHOD
    assert classifier.parameter_texts(method, source) == ["int a", "int b"]
    assert classifier.find_leading_comment(method) == (comment, comment)

    assert classifier.refine_kind(constructor, source) is UnitKind.CONSTRUCTOR
    assert source.node_text(classifier.find_name_node(constructor)) == "Calc"
    assert classifier.parameter_texts(constructor, source) == ["String name"]
