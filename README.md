# minishell

A small interactive command shell. It reads one line at a time and runs
the commands on it. Commands can be joined with pipes, have their input
and output redirected to files, and read here-documents. It needs a
POSIX system, since pipelines are run with `fork`.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Usage

Start the shell with no arguments:

```
minishell
```

The prompt is `@minishell> $ `. Press Ctrl-D to leave; the shell writes
`exit` to standard error and ends with status 0. Ctrl-C drops the
current line and gives a fresh prompt. Ctrl-\ is ignored. If the
`readline` module is available it is loaded, so input lines can be
edited. If you pass any arguments the shell prints
`Error: there is no arguments.` and returns -1.

### What a line may hold

- Commands and their arguments, separated by spaces. A program is run
  as named when that path is executable; otherwise it is looked up in
  the directories of `PATH` as held in the shell's own environment.
- Pipes: `ls | grep py | wc -l`. Every stage runs in its own process.
- Redirections: `< file` reads from a file, `> file` truncates and
  writes, `>> file` appends (new files get mode 0644).
- Here-documents: `<< STOP` reads lines with the prompt `> ` until end
  of input or a line that is the start of `STOP`; an empty line, or any
  prefix of the delimiter such as `ST`, also ends it. Each word in those
  lines that holds a `$` is replaced by the value it names; words are
  joined without the spaces between them. The text is written to a file
  `heredoc_0`, `heredoc_1`, … in the current directory, which the
  command then reads. These files are not removed afterwards.
- Quotes: text in `'single quotes'` is taken as is; in `"double
  quotes"` a `$NAME` is expanded. The quotes themselves are removed. A
  line with an unclosed quote is rejected with
  `minishell: syntax error with open quotes`.
- Expansion: `$NAME` gives the variable's value (empty if unset), `$$`
  the process id, and a lone `$` stays `$`. `$?` gives the shell's
  status value: 0 at start, and 130 after any line has been handled
  (the exit statuses of commands are not kept there).

Syntax errors are reported and the line is skipped: a pipe at the start
or end of a line or next to another pipe gives
``bash: syntax error near unexpected token `|'``, and a redirection with
no file after it gives
``bash: syntax error near unexpected token `newline'``.

### Builtins

| Command  | Effect |
|----------|--------|
| `cd DIR` | change directory; `PWD` and `OLDPWD` are both set to `DIR`. With no argument nothing happens; with more than one, an error is printed |
| `echo [-n] ARGS` | print the arguments joined by spaces; a first argument `-n` (or `-nnn…`) drops the newline. With nothing to print, nothing is printed |
| `env`    | print every environment entry on its own line |
| `export NAME=VALUE ...` | set variables; arguments without `=` are ignored; a space or `?` before the `=` is an error. With no arguments acts like `env` |
| `unset NAME ...` | remove variables; a name holding `=`, a space or `?` is refused |
| `pwd`    | print the working directory (paths of 200 bytes or more are refused) |
| `exit [N]` | leave the shell with status `N` (digits only); a non-numeric or extra argument ends the shell with status 130 |

A single builtin with no pipe runs inside the shell, so `cd`, `export`
and `unset` change the shell itself. If one of its redirections fails
the error is printed and the builtin still runs. In a pipeline a
builtin runs in a child process, and a failed redirection ends that
stage with status 130.

## Using it from Python

```python
import os

from minishell.shell import Shell
from minishell.state import ShellState

state = ShellState.from_environ(os.environ, os.getcwd())
shell = Shell(state, input)
shell.execute_line("echo hello | tr a-z A-Z")
```

`Shell.parse(line)` returns the list of `Command` objects for a line
(or `None` after reporting an error), `Shell.execute_line(line)` parses
and runs it, and `Shell.run()` runs the interactive loop and returns
the final status. `minishell.shell.main()` is what the `minishell`
command calls. The lower layers can be used alone:

- `minishell.tokens`: `tokenize`, `validate_syntax`,
  `has_unclosed_quotes`, `Token`, `TokenKind`, `ShellSyntaxError`
- `minishell.expansion`: `expand_token`, `expand_tokens`,
  `expand_heredoc_line`
- `minishell.commands`: `build_commands`, `Command`, `Redirection`
- `minishell.environment`: `Environment` with `set`, `unset`, `lookup`
- `minishell.builtins`: `is_builtin`, `run_builtin`, `echo_text`,
  `ShellExit`
- `minishell.executor`: `find_executable`, `run_pipeline`,
  `run_commands`

## What it does not do

- There are no `;`, `&&`, `||`, background jobs, subshells, wildcards
  or `~` expansion.
- Programs are started with the process environment the shell was
  started with; variables set with `export` or removed with `unset`
  only affect `$NAME` expansion, `env` output and the `PATH` search.
- There is no history file and no startup file.