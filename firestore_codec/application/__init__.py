"""Application layer: the Serializer facade over the codecs."""
