"""Parser for the command language of the shell: pipes, lists, background jobs, redirection."""

from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, Union

MAXARGS = 10

_WHITESPACE = " \t\r\n\v"
_SYMBOLS = "<|>&;()"


class OpenMode(IntFlag):
    """Flags for opening a file."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


class ShellSyntaxError(ValueError):
    """The command line could not be parsed."""

    def __init__(self, message, leftovers=None):
        super().__init__(message if leftovers is None else f"{message}: leftovers: {leftovers}")
        self.leftovers = leftovers


@dataclass
class ExecCmd:
    """Run a program with arguments."""

    argv: List[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run cmd with descriptor fd reopened on file."""

    cmd: "Command"
    file: str
    mode: OpenMode
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of left to the input of right."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run left, wait for it, then run right."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run cmd without waiting for it."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Parser:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def _skip_space(self):
        text = self.text
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1

    def peek(self, toks):
        self._skip_space()
        return self.pos < len(self.text) and self.text[self.pos] in toks

    def gettoken(self):
        """Consume one token; return its kind and its text."""
        self._skip_space()
        text = self.text
        start = self.pos
        if start >= len(text):
            tok = ""
        else:
            c = text[start]
            if c in "|();&<":
                self.pos += 1
                tok = c
            elif c == ">":
                self.pos += 1
                tok = ">"
                if self.pos < len(text) and text[self.pos] == ">":
                    tok = "+"
                    self.pos += 1
            else:
                tok = "a"
                while (
                    self.pos < len(text)
                    and text[self.pos] not in _WHITESPACE
                    and text[self.pos] not in _SYMBOLS
                ):
                    self.pos += 1
        word = text[start:self.pos]
        self._skip_space()
        return tok, word

    def parse_line(self):
        cmd = self.parse_pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.parse_line())
        return cmd

    def parse_pipe(self):
        cmd = self.parse_exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.parse_pipe())
        return cmd

    def parse_redirs(self, cmd):
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, file = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, file, OpenMode.RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(cmd, file, OpenMode.WRONLY | OpenMode.CREATE | OpenMode.TRUNC, 1)
            else:
                cmd = RedirCmd(cmd, file, OpenMode.WRONLY | OpenMode.CREATE, 1)
        return cmd

    def parse_block(self):
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.parse_line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.parse_redirs(cmd)

    def parse_exec(self):
        if self.peek("("):
            return self.parse_block()
        exec_cmd = ExecCmd()
        ret = self.parse_redirs(exec_cmd)
        while not self.peek("|)&;"):
            tok, word = self.gettoken()
            if tok == "":
                break
            if tok != "a":
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(word)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.parse_redirs(ret)
        return ret


def parse_cmd(line):
    """Parse one command line into a command tree."""
    parser = _Parser(line.split("\0", 1)[0])
    cmd = parser.parse_line()
    parser.peek("")
    if parser.pos != len(parser.text):
        raise ShellSyntaxError("syntax", leftovers=parser.text[parser.pos:])
    return cmd