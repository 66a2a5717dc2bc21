"""Registry — SynBioHub REST client and the metadata records it returns."""
