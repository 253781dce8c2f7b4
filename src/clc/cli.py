from argparse import ArgumentParser, REMAINDER, OPTIONAL
from os import path
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .alfred import alfred_error, alfred_result
from .history import History
from .lexer import Lexer, tokenize
from .parser import format_postfix, parse_and_evaluate, resolve, \
    split_lines, to_postfix
from .util import ClcError, wrap_user_errors


logger = logging.getLogger(__name__)


class InteractiveInput:
    '''
    Lines typed at a prompt, until EOF.
    '''

    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        history = None
        if self.history_file is not None:
            history = FileHistory(path.expanduser(self.history_file))
        session = PromptSession(message=self.prompt,
                                enable_suspend=True,
                                history=history,
                                erase_when_done=False)
        while True:
            try:
                yield session.prompt()
            except KeyboardInterrupt:
                # Drop the line, keep the session.
                continue
            except EOFError:
                return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    # Results, as $1, $2, ...
    HISTORY_FILE = '~/.clc_history'
    HISTORY_SIZE = 10
    # Typed lines, for the interactive prompt's up-arrow.
    INPUT_HISTORY_FILE = '~/.clc_input_history'

    def dumper(self):
        '''
        Dump tokens and postfix of every line.
        '''
        history = self._history()
        try:
            programs = self._programs()
        except ClcError as e:
            print(e.args[0], file=sys.stderr)
            return 1
        status = 0
        for program in programs:
            try:
                tokens = tokenize(program)
                print('[tokens]', *('{}:{}'.format(token.kind, token.lexeme)
                                    for token
                                    in tokens))
                for line in split_lines(tokens):
                    print('[postfix]',
                          format_postfix(to_postfix(resolve(line, history))))
            except ClcError as e:
                print(e.args[0], file=sys.stderr)
                status = 1
        return status

    def executor(self):
        '''
        Evaluate programs, printing each result.
        '''
        history = self._history()
        try:
            programs = self._programs()
        except ClcError as e:
            self._report(e)
            return 1
        interactive = isinstance(programs, InteractiveInput)
        status = 0
        for program in programs:
            if not program.strip():
                continue
            try:
                value = parse_and_evaluate(tokenize(program), history)
            # Abort the rest of the program, the way a failed line does.
            except ClcError as e:
                self._report(e)
                if not interactive:
                    status = 1
                continue
            print(self._present(value))
            history.save()
        return status

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)
        return 0

    def _present(self, value):
        if self.args.alfred:
            return alfred_result(value)
        return value.render(self.args.mode)

    def _report(self, error):
        if self.args.alfred:
            print(alfred_error(error.args[0]))
        else:
            print(error.args[0], file=sys.stderr)

    def _history(self):
        if self.args.no_history:
            history = History(capacity=self.args.history_size)
        else:
            history = History(path.expanduser(self.args.history_file),
                              capacity=self.args.history_size)
        try:
            history.load()
        except OSError as e:
            logger.warning('Failed to load history: %s', e)
        return history

    @wrap_user_errors('Cannot read {1}')
    def _read(self, filename):
        with open(filename, encoding='utf-8') as fp:
            return fp.read()

    def _programs(self):
        '''
        Return iterable of programs to run, from wherever the user asked.

        Stdin is read as one program unless both stdin/out are a tty or a
        prompt was explicitly specified, in which case each typed line is a
        program.
        '''
        if self.args.expressions is not None:
            return [' '.join(self.args.expressions)]
        elif self.args.file is not None:
            return [self._read(self.args.file)]
        elif self.args.prompt or \
                sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.INPUT_HISTORY_FILE)
        return [sys.stdin.read()]

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            prog='clc',
            description='Width and unit aware calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        sources = self.argument_parser.add_mutually_exclusive_group()
        sources.add_argument('-e', '--expression',
                             nargs=REMAINDER,
                             dest='expressions')
        sources.add_argument('-f', '--file')
        sources.add_argument('-p', '--prompt',
                             nargs=OPTIONAL,
                             const=self.DEFAULT_PROMPT)
        modes = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, mode in [('-x', '--hex', 'hex'),
                                    ('-o', '--octal', 'octal'),
                                    ('-b', '--binary', 'binary'),
                                    ('-a', '--all', 'all')]:
            modes.add_argument(short_, long_,
                               action='store_const',
                               const=mode,
                               dest='mode')
        modes.add_argument('--alfred',
                           action='store_true',
                           help='Alfred script filter JSON output')
        self.argument_parser.add_argument('--history-file',
                                          default=self.HISTORY_FILE)
        self.argument_parser.add_argument('--history-size',
                                          type=int,
                                          default=self.HISTORY_SIZE)
        self.argument_parser.add_argument('--no-history',
                                          action='store_true')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          mode='plain')

    def run(self, args=None):
        '''
        Run CLI, given these args, or the process's. Return exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.history_size < 1:
            self.argument_parser.error('--history-size must be positive')
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(levelname)s: %(name)s: %(message)s')
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
