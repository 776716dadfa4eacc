# mummy/artifact/vocab.py
"""
URI tags of description properties.

Engine bookkeeping lives in the `urn:mummy:` namespace; harvested metadata
uses Dublin Core terms so it can be handed to other tools unchanged.
"""

MUMMY_NAMESPACE = "urn:mummy:"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"

PROPERTY_TAG_SOURCE_MODIFIED_AT = MUMMY_NAMESPACE + "sourceModifiedAt"
PROPERTY_TAG_TARGET_MODIFIED_AT = MUMMY_NAMESPACE + "targetModifiedAt"
PROPERTY_TAG_ASPECT = MUMMY_NAMESPACE + "aspect"
# Only ever seen in documents written by older tools; stripped before persisting.
PROPERTY_TAG_DIRTY = MUMMY_NAMESPACE + "dirty"

PROPERTY_TAG_CONTENT_TYPE = "urn:content:type"

PROPERTY_TAG_TITLE = DCTERMS_NAMESPACE + "title"
PROPERTY_TAG_DESCRIPTION = DCTERMS_NAMESPACE + "description"
PROPERTY_TAG_COPYRIGHT = DCTERMS_NAMESPACE + "rights"
PROPERTY_TAG_CREATOR = DCTERMS_NAMESPACE + "creator"
