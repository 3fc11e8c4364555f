"""
Preference engine: weighted random picks over scored items and like/dislike
feedback that spreads to items sharing a tag.

Modules
-------
item     : Item dataclass + like() / dislike() / nudge() mutators.
selector : item_weight() + select() + EmptyInputError — pure functions, no I/O.
category : TagGroup — items sharing one tag, weighted draw, case-insensitive
           member lookup.
store    : PreferenceStore — owns every Item plus the name / tag / file
           indices; apply_feedback() and apply_category_feedback().
"""
