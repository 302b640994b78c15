"""
Tests for the TranspileEngine (end-to-end behaviour).

Verifies:
1. Markup-free input is returned byte for byte.
2. Fragments in every expression position are lowered, including markup
   nested inside embedded expressions.
3. Embedded expressions are read as expressions (object literals, comments).
4. Configuration changes the emitted call names and parse mode.
5. Failures abort the whole call and surface in ConversionResult.
"""

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from jsx_transpiler import transpile
from jsx_transpiler.config import RuntimeConfig
from jsx_transpiler.core.engine import TranspileEngine, transpile_file, transpile_source
from jsx_transpiler.core.errors import HostParseError, InternalError, LexError, ParseError
from jsx_transpiler.core.generator import quote
from jsx_transpiler.core.tracer import TraceEventType

# --- Round Trip ---


def test_markup_free_input_unchanged(engine):
  source = "function f(a, b) {\n  return a < b ? {x: 1} : [b];\n}\n"
  assert engine.transpile_source(source) == source


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(values=st.lists(st.integers(min_value=0, max_value=10**6), min_size=1, max_size=5))
def test_plain_programs_round_trip(values):
  source = "".join(f"var v{i} = {n} < {i};\n" for i, n in enumerate(values))
  assert transpile(source) == source


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
  text=st.text(
    alphabet=st.characters(min_codepoint=32, max_codepoint=126, blacklist_characters="<{"),
    min_size=1,
    max_size=20,
  )
)
def test_text_child_is_quoted(text):
  out = transpile(f"var x = <p>{text}</p>;")
  assert out == f'var x = React.createElement("p", null, {quote(text)});'


# --- Lowering ---


def test_simple_element():
  assert transpile("var x = <a/>;") == 'var x = React.createElement("a", null);'


def test_attributes_and_expression_child():
  source = 'var x = <p className="note">{hello}</p>;'
  assert transpile(source) == 'var x = React.createElement("p", {className: "note"}, hello);'


def test_spread_and_component():
  source = 'render(<Nav {...props} color="blue">Hi</Nav>);'
  assert transpile(source) == 'render(React.createElement(Nav, React.__spread({}, props, {color: "blue"}), "Hi"));'


def test_nested_markup_in_expression():
  source = "var x = <ul>{items.map(function(i) { return <li key={i}>{i}</li>; })}</ul>;"
  assert transpile(source) == (
    'var x = React.createElement("ul", null, '
    'items.map(function(i) { return React.createElement("li", {key: i}, i); }));'
  )


def test_markup_inside_attribute_expression():
  source = "var x = <A icon={<B/>}/>;"
  assert transpile(source) == "var x = React.createElement(A, {icon: React.createElement(B, null)});"


def test_spread_ordering():
  source = 'var x = <N {...a} {...b} c="d"></N>;'
  assert transpile(source) == 'var x = React.createElement(N, React.__spread({}, a, b, {c: "d"}));'


def test_markup_as_sole_child_expression():
  assert transpile("var x = <N>{<M/>}</N>;") == "var x = React.createElement(N, null, React.createElement(M, null));"


def test_object_literal_expression():
  source = 'var x = <a style={{color: "red"}}/>;'
  assert transpile(source) == 'var x = React.createElement("a", {style: {color: "red"}});'


def test_comment_only_child_is_dropped():
  assert transpile("var x = <a>{/* note */}</a>;") == 'var x = React.createElement("a", null);'


def test_resumption_after_fragment():
  source = "var a = <a/>; var b = 1 < 2;"
  assert transpile(source) == 'var a = React.createElement("a", null); var b = 1 < 2;'


def test_generation_is_deterministic(engine):
  source = 'var x = <div id="a">{y}<br/></div>;'
  assert engine.transpile_source(source) == engine.transpile_source(source)


def test_display_name_injected_when_markup_present():
  source = "var Hello = React.createClass({render: function() { return <div/>; }});"
  assert transpile(source) == (
    'var Hello = React.createClass({displayName: "Hello", '
    'render: function() { return React.createElement("div", null); }});'
  )


def test_line_separators_survive_second_pass():
  out = transpile('var x = <a title="\u2028">\u2029</a>;')
  assert out == 'var x = React.createElement("a", {title: "\\u2028"}, "\\u2029");'
  assert transpile(out) == out


def test_output_is_stable_under_second_pass():
  once = transpile("var Hello = React.createClass({render: function() { return <div/>; }});")
  assert transpile(once) == once


# --- Expressions ---


def test_transpile_expression(engine):
  assert engine.transpile_expression("") == ""
  assert engine.transpile_expression(" /* x */ ") == ""
  assert engine.transpile_expression("{a: 1}") == "{a: 1}"
  assert engine.transpile_expression("<a/>") == 'React.createElement("a", null)'


def test_expression_with_line_comment(engine):
  assert engine.transpile_expression("x // trailing") == "x // trailing"


# --- Configuration ---


def test_custom_call_names():
  config = RuntimeConfig(element_factory="h", spread_helper="Object.assign")
  assert transpile("var x = <a {...p}/>;", config) == 'var x = h("a", Object.assign({}, p));'


def test_display_names_can_be_disabled():
  config = RuntimeConfig(annotate_display_names=False)
  source = "var A = React.createClass({render: function() { return <a/>; }});"
  assert transpile(source, config) == (
    'var A = React.createClass({render: function() { return React.createElement("a", null); }});'
  )


def test_module_source_type():
  config = RuntimeConfig(source_type="module")
  source = 'import A from "a";\nexport default <A/>;'
  assert transpile(source, config) == 'import A from "a";\nexport default React.createElement(A, null);'


# --- Failures ---


@pytest.mark.parametrize(
  "source, error",
  [
    ("var x = <a>;", LexError),
    ('var x = <a b="c>;', LexError),
    ('var x = <a b="c/>;', LexError),
    ("var x = <a b={}/>;", ParseError),
    ("var x = <_a/>;", InternalError),
    ("var = 1;", HostParseError),
    ("var x = <a>{y z}</a>;", HostParseError),
  ],
)
def test_failures(source, error):
  with pytest.raises(error):
    transpile(source)


def test_run_captures_failure(engine):
  result = engine.run("var x = <a>;")
  assert not result.success
  assert result.code == ""
  assert result.has_errors
  assert "unexpected end of input inside element" in result.errors[0]


def test_run_success_records_trace(engine):
  result = engine.run("var x = <a/>;")
  assert result.success
  assert result.code == 'var x = React.createElement("a", null);'
  phases = [e["description"] for e in result.trace_events if e["type"] == TraceEventType.PHASE_START]
  assert phases == ["Host Parse", "Boundary Walk"]


# --- Module Functions ---


def test_transpile_file(tmp_path):
  path = tmp_path / "hello.jsx"
  path.write_text("var x = <a/>;\n", encoding="utf-8")
  assert transpile_file(path) == 'var x = React.createElement("a", null);\n'


def test_transpile_source_function():
  assert transpile_source("<a/>;") == 'React.createElement("a", null);'


def test_engine_is_reusable(engine):
  assert engine.transpile_source("<a/>;") == engine.transpile_source("<a/>;")
  assert isinstance(TranspileEngine().config, RuntimeConfig)
