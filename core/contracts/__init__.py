"""core.contracts

Small ABCs the signature pad is wired through: render sinks, the output
string slot and the timer scheduler. Concrete Tk, Pillow and SQLite
implementations live in the feature package.
"""
