"""Infrastructure: protobuf wire streams and Firestore codecs."""
