"""HTML samples of the Mediapart billing page across markup eras."""
