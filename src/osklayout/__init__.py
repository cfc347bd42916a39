
# Layout loading stages
# loader: pick candidate sources (override file, bundled resource) and try them in order
# schema: parse one source into a LayoutDocument
# resolve: turn button metadata into actions
# layout: allocate keycodes, write the keymap, assemble views of buttons sharing KeyStateCells
