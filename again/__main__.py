from again.cli import main

main(prog_name="again")
