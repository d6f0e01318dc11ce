# mockctl

`mockctl` provides building blocks for expectation-based mocking: argument
matchers that describe which values a mocked method should receive,
reporters through which failures are reported, and helpers for naming
things in generated mock source code.

It has no dependencies outside the standard library.

## Matchers: `mockctl.matchers`

Every matcher is a `Matcher` with a `matches(x)` method and a readable
`str()` description.

| Function | Matches |
| --- | --- |
| `anything()` | any value (`"is anything"`) |
| `eq(x)` | values equal to `x` whose type is compatible with `x`'s; lists, tuples and dicts are compared element by element, and `bool` is never equal to `int` |
| `is_none()` | `None` (`"is nil"`) |
| `not_(x)` | what the matcher `x`, or `eq(x)`, does not match |
| `any_of(*args)` | when at least one matcher or value matches |
| `all_of(*args)` | when every matcher or value matches |
| `has_len(n)` | sized values of length `n`; unsized values never match |
| `regex(pattern)` | `str`, `bytes` or `bytearray` in which `pattern` is found anywhere |
| `cond(fn)` | when `fn(value)` is true |
| `assignable_to_type_of(x)` | instances of `x` if it is a type, else of `type(x)` |
| `in_any_order(x)` | lists or tuples holding the same elements as `x`, in any order |

`to_matcher(x)` turns an expected argument into a matcher: matchers are
kept, `None` becomes `is_none()`, anything else becomes `eq(x)`.

Failure messages can be shaped:

- `want_formatter(description, matcher)` makes `str(matcher)` return
  `description` (a string, or a function returning one).
- `got_formatter_adapter(formatter, matcher)` attaches a way of describing
  received values; `formatter` is a `GotFormatter` or a plain function.
- `format_got(matcher, arg)` describes a received value with the matcher's
  own formatter if it has one, else as `"<value> (<type name>)"`.

```python
from mockctl.matchers import any_of, eq, got_formatter_adapter, format_got, has_len, is_none, regex

assert eq(5).matches(5)
assert not eq(4).matches(True)
assert any_of(is_none(), has_len(2), 1, 2, 3).matches("hi")
assert regex("[0-9]{2}:[0-9]{2}").matches(b"23:02")
assert str(eq(15)) == "is equal to 15 (int)"

m = got_formatter_adapter(lambda v: f"{v:02d}", eq(15))
assert format_got(m, 3) == "03"
```

## Reporters: `mockctl.reporter`

- `TestReporter` is the abstract interface: `errorf(message)` reports a
  failure and lets the test go on; `fatalf(message)` reports one and stops
  it. Any object with these two methods can be used where a reporter is
  expected.
- `RaisingReporter` collects every message in `messages`, has a `failed`
  property, and raises `MockFailure` (an `AssertionError`) from `fatalf`.
- `NopTestHelper` wraps a reporter that has no `helper()` method and gives
  it a no-op one; `as_helper(reporter)` returns the reporter itself if it
  already has `helper()`, else wraps it.
- `CancelReporter(reporter, cancel)` forwards to `reporter` and calls
  `cancel()` after every fatal failure.
- `unwrap_reporter(reporter)` strips these wrappers;
  `cleanup_hook(reporter)` returns the underlying reporter's `cleanup`
  method if it has one, else `None`.
- `caller_info(skip)` returns `"file:line"` of a caller on the stack
  (`skip` 0 is the function calling `caller_info`), or `"unknown file"`.

## Naming helpers: `mockctl.naming`

- `IdentifierAllocator(taken)` hands out identifiers that do not clash:
  `allocate("m")` returns `"m"`, or `"m_2"`, `"m_3"`… if taken, and marks
  the result taken. It supports `len()`, `in` and iteration.
- `make_arg_string(names, types)` builds a parameter list, writing a type
  once for consecutive parameters of the same type:
  `make_arg_string(["a", "b", "c"], ["int", "int", "bool"])` gives
  `"a, b int, c bool"`.
- `sanitize(name)` replaces characters that cannot appear in a package
  name with `_` (a lone `_` becomes `x`): `sanitize("foo-bar")` gives
  `"foo_bar"`.
- `parse_mock_names("Foo=FakeFoo,Bar=FakeBar")` gives a dict and raises
  `ValueError` on a pair without a name after `=`.
- `parse_exclude_interfaces("a,b,,a")` gives `{"a", "b"}`, or `None` when
  no names are given.
- `mock_name(mock_names, type_name)` returns the explicit name if one is
  given, else `"Mock" + type_name`.

## Package discovery: `mockctl.packages`

- `module_path(data)` returns the module path declared in the contents of a
  `go.mod` file (bytes or text), or `""`.
- `parse_package_import(src_dir)` returns the import path of a directory:
  from the nearest enclosing `go.mod` (unless the `GO111MODULE` environment
  variable is `off`), otherwise relative to a `src` directory under one of
  the `GOPATH` roots. It raises `ValueError` if `GOPATH` is unset or the
  directory lies outside it.
- `create_package_map(import_paths)` runs `go list -json` on the import
  paths and maps each to its package name. Without a `go` toolchain on the
  `PATH` it returns an empty dict.

## What this package does not do

There is no controller here that records expected calls, dispatches actual
calls to them, counts calls or enforces their order, and no command that
writes mock source code. The package supplies the matchers, reporters and
naming helpers such tools are built from.