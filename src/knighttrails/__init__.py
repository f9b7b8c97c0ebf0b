"""Knight trails: trace knight paths on a chessboard and narrate the patterns."""
