# minilexer

`minilexer` splits an interactive shell command line into the words a
command executor needs. It handles:

- blanks and tabs as word separators;
- pipes (`|`) and redirections (`<`, `>`, `<<`, `>>`);
- single quotes (taken literally) and double quotes (with `$` expansion);
- `$NAME` and `$?` expansion from an environment and the previous exit status;
- here-document delimiters, which are never expanded;
- syntax errors such as a dangling pipe, a missing redirection target or an
  unclosed quote.

Within each pipeline segment the words are reordered so that the command
and its arguments come before any redirections.

It has no dependencies outside the standard library and needs Python 3.10
or later.

## Tokenizing a line

```python
from minilexer.parser import tokenize, ParseError

words = tokenize("> out.txt echo hi", {}, 0)
# ['echo', 'hi', '>', 'out.txt']

try:
    tokenize("echo hi |", {}, 0)
except ParseError as err:
    print("syntax error:", err, "status", err.status)
```

`tokenize(line, env, prev_status)` takes the raw line, a mapping of
environment variables used for `$NAME` expansion (an unknown or unset
variable expands to an empty string), and the exit status that `$?`
expands to. A `ParseError` carries the offending token in `token` and the
status `2` in `status`.

For finer control, build a `Parser` yourself:

```python
from minilexer.parser import Parser

parser = Parser('cat "$FILE" | wc -l', {"FILE": "notes.txt"}, 0)
parser.parse()      # list of Token objects, in source order
parser.reorder()    # commands and arguments moved ahead of redirections
print(parser.words())
```

`minilexer.parser.is_delimiter(char)` tells whether a character ends a
plain word.

## Tokens

`minilexer.tokens` holds the `Token` record (its `type`, `text`,
`pipe_idx`, `is_end` and `is_quote` fields, and `append(text)`) and the
`TokenType` enumeration (`CMD`, `ARG`, `FILE`, `RED`, `PIPE`) that the
parser produces, together with `move_token(tokens, index, position)`,
which moves one item earlier in a list while keeping the rest in order
and returns the position after it.

## Text helpers

`minilexer.textutils` provides:

- `parse_int(text)`: reads a signed decimal integer the way an `exit`
  builtin does, allowing leading blanks and one sign, raising `ValueError`
  on trailing garbage or on values that overflow a 64-bit integer, and
  wrapping the result into the signed 32-bit range;
- `is_blank(line)`: true when a line holds nothing but spaces and tabs.

## A read–execute loop

`minilexer.shell.Shell` ties it together. Give it an environment (a
mapping, or a list of `KEY=VALUE` strings) and a function that takes the
list of words and the environment and returns an exit status; then feed
it lines:

```python
from minilexer.shell import Shell

def execute(words, env):
    print(words)
    return 0

shell = Shell({"HOME": "/home/user"}, execute)
shell.handle_line("echo $HOME")   # prints ['echo', '/home/user']
```

`Shell.run(read_line)` repeatedly calls `read_line` with the current prompt
until it returns `None` or raises `EOFError`, and returns the last exit
status; without an argument it reads with `input`. Blank lines are
skipped; other lines are added to `Shell.history`. Parse errors are
reported on standard error and set the status without running anything.
`Shell.prompt()` and `get_prompt(prev_status)` give the prompt, which turns
red after a failed command.

## What it does not do

`minilexer` only reads and tokenizes lines. It does not run programs, set
up pipes or redirections, read here-documents or provide builtins such as
`cd`, `echo`, `export` or `exit`; all of that is left to the function
handed to `Shell`. It installs no command of its own.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.