"""Tree-walking interpreter for the Lox scripting language."""
