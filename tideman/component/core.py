'''Registers of named component functions.

Components can be specified either by a callable or by the name under
which a function was registered; these factories build the registering
decorator and the lookup functions around a single register dictionary.
'''

from typing import Callable, Dict, Tuple, Union


def register_functions(register: Dict[str, Callable],
                       name: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Construct the marker, getter and constructer for a register.

    :param register: Dictionary to hold the functions by their names.
    :param name: Human-readable name of the component kind, used in
        error messages.
    :returns: A decorator that registers a function under its own name,
        a getter that retrieves a registered function by name, and
        a constructer that passes callables through and looks up names.
    '''
    def mark(func: Callable) -> Callable:
        register[func.__name__] = func
        return func

    def get(func_def: str) -> Callable:
        try:
            return register[func_def]
        except KeyError:
            raise KeyError(
                f'unknown {name}: {func_def}, available: '
                + ', '.join(register.keys())
            )

    def construct(func_def: Union[str, Callable]) -> Callable:
        return func_def if callable(func_def) else get(func_def)

    return mark, get, construct
