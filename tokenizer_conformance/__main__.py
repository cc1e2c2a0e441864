from tokenizer_conformance.cli import main

main()
