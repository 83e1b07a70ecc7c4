# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Entry point for running underbar as `python -m underbar`.'''

if __name__ == '__main__':
    import underbar.commanding
    underbar.commanding.underbar()
