# minishell

A small interactive shell. It reads a line, splits it into tokens the way a
POSIX shell does with quotes, and runs a handful of built-in commands.

## Installing

    pip install .

## Running

    minishell

The prompt is `MINIPROMPT$ `. Type `exit`, or press Ctrl+D, to leave. The
command takes no arguments; given any, it prints a notice and returns -1.
Ctrl+\ is ignored.

## What it understands

- Words, and text in `'single'` or `"double"` quotes. Quoted and unquoted
  parts that touch are joined into one token, so `abc'  cd'e` becomes
  `abc  cde`. A quote that is never closed is reported as an error.
- Operators: `|`, `>`, `>>`, `<` and `<<` (heredoc). `>` and `>>` send the
  output of a built-in to a file; `<` checks that its file can be opened;
  `<<` reads lines until one starts with the delimiter.
- `$?` expands to the last exit status; a lone `$` stays as `$`; `$NAME`
  expands from the state's `exports`.
- Built-ins: `echo`, `cd`, `pwd`, `env` and `export NAME=value`.

## Using it as a library

    from minishell.tokens import lexer, token_type_name

    for token in lexer("echo 'hello  world' > out.txt"):
        print(token.text, token_type_name(token.type))

- `minishell.tokens`: `lexer`, `Token`, `TokenType`, `determine_token_type`,
  `token_type_name` and `UnclosedQuoteError`.
- `minishell.state.ShellState`: the session state; `ShellState.from_environ`
  builds it from a mapping or `NAME=value` strings, and `reset` clears the
  per-command fields.
- `minishell.builtins`: `echo`, `cd`, `pwd`, `env`, `export`, `run_builtin`
  and `is_builtin`, each writing to the stream you pass.
- `minishell.shell`: `process_input` runs one line against a state,
  `shell_loop` drives the read–evaluate loop with any line reader and output
  stream, and `main` is the command's entry point.

## What it does not do

- It runs no external programs: only the built-ins above do anything.
- Pipes are recognised but not carried out; only the first built-in on a
  line runs.
- `unset` is recognised as a built-in name but has no effect.