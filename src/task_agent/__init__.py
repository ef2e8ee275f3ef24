# autonomous task loop: execute -> store -> create -> reprioritize

__version__ = "0.1.0"
