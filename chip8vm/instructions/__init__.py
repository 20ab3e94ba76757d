"""CHIP-8 instruction handlers, grouped like the opcode table."""
