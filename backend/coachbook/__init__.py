"""CoachBook backend: candidates book paid interview-coaching sessions with experts."""
