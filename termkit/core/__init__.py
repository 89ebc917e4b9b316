"""Terminal primitives: keys, screens, markup rendering and line editing."""
