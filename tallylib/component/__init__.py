'''Interchangeable building blocks of the tallies.

Each module holds a registry of functions keyed by name, so that tallies can
be configured by strings (e.g. ``quota='droop'``) as well as by passing
a custom callable.
'''
