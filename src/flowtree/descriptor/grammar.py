"""PEG grammar for hierarchy descriptors, in parsimonious format.

Canonical form::

    graph[<ancestors>][<layout>][<id>][<children>]

  - ancestors: root-first ids joined by ``|``, empty for roots
  - layout:    LR / RL / TD / DT, or empty before the node has children
  - children:  comma-separated ``id`` or ``id:layout`` entries

Whitespace is only tolerated around child entries. Any other text,
including older descriptor formats, does not match.
"""

GRAMMAR = r"""
descriptor      = "graph" ancestors_part layout_part id_part children_part

ancestors_part  = "[" ancestors "]"
layout_part     = "[" layout "]"
id_part         = "[" node_id "]"
children_part   = "[" children "]"

ancestors       = ancestor_list?
ancestor_list   = node_id ("|" node_id)*

layout          = layout_tag?
layout_tag      = "LR" / "RL" / "TD" / "DT"

children        = OWS child_list? OWS
child_list      = child (OWS "," OWS child)*
child           = node_id (":" layout_tag)?

node_id         = ~r"[A-Z]+[1-9][0-9]*"

OWS             = ~r"[ \t]*"
"""
