from pytest import fixture

from clc import History, evaluate


@fixture
def history():
    '''
    Small in-memory history, as $1, $2, ... see it.
    '''
    return History(capacity=5)


@fixture
def calc(history):
    '''
    Evaluate text against the history fixture.
    '''
    def calc(text):
        return evaluate(text, history)
    return calc
