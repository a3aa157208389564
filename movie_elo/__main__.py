from movie_elo.cli import main


main()
