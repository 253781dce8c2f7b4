import logging
from collections import deque
from os import path

from .value import Value


logger = logging.getLogger(__name__)


class History:
    '''
    Most recent results, newest first, as referred to by $1, $2, ...

    Bounded: once full, pushing drops the oldest. Optionally backed by a
    file, one typed value per line.
    '''

    def __init__(self, filename=None, capacity=10):
        '''
        :param filename: File to load from and save to, if any.
        :param capacity: Most values kept.
        '''
        if capacity < 1:
            raise ValueError('History capacity must be positive')
        self.filename = filename
        self.values = deque(maxlen=capacity)

    @property
    def capacity(self):
        return self.values.maxlen

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def push(self, value):
        self.values.appendleft(value)

    def get(self, index):
        '''
        Return value at 1-based index, newest first; zero if out of range.
        '''
        if not 1 <= index <= len(self.values):
            return Value.zero()
        return self.values[index - 1]

    def load(self):
        '''
        Replace contents with the file's. A missing file is an empty history.

        Unreadable lines are skipped.
        '''
        self.values.clear()
        if self.filename is None or not path.exists(self.filename):
            return self
        # Undecodable bytes fail to parse like any other bad line.
        with open(self.filename, encoding='utf-8', errors='replace') as fp:
            for number, line in enumerate(fp, start=1):
                if not line.strip():
                    continue
                if len(self.values) >= self.capacity:
                    break
                value = Value.from_typed_string(line)
                if value is None:
                    logger.warning('%s:%d: skipping unreadable history entry %r',
                                   self.filename, number, line.rstrip('\n'))
                    continue
                # File is newest first too.
                self.values.append(value)
        return self

    def save(self):
        '''
        Write contents to the file, newest first.

        Failing to save is logged, not raised; it never costs a result.
        '''
        if self.filename is None:
            return
        try:
            with open(self.filename, 'w', encoding='utf-8') as fp:
                for value in self.values:
                    print(value.as_typed_string(), file=fp)
        except OSError as e:
            logger.warning('Failed to save history to %s: %s',
                           self.filename, e)
