"""
CSV list files: the storage side of the picker.

Modules
-------
csv_store : ListDirectory — scans a directory for *.csv lists, turns rows into
            ItemRecord objects and rewrites whole files when scores change.
editor    : create_list() + open_list() / EditableList — create new lists and
            add / remove / show rows of existing ones.
"""
