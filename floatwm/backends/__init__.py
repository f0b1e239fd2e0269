"""
floatwm.backends - Concrete host containers.

    - tk : TkHost, a host container built on tkinter
"""
