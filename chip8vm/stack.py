"""CHIP-8 stack operations."""

from chip8vm.constants import ADDRESS_MASK, STACK_SIZE
from chip8vm.errors import StackOverflowError, StackUnderflowError
from chip8vm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"call depth exceeds {STACK_SIZE}")
    new_data = stack.data.copy()
    new_data[stack.pointer] = address & ADDRESS_MASK
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("return with an empty stack")
    new_pointer = stack.pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.copy()
    new_data[new_pointer] = 0
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
