"""Context-free grammars with NULLABLE, FIRST, FOLLOW and left-recursion analyses."""