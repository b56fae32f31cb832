"""
Main entrypoint for the travel search client.

Usage:
    python main.py locations del
    python main.py flights DEL BOM 2025-12-01 [--return-date 2025-12-08] [--adults 2]
    python main.py serve [--port 8000]
"""
import os
import sys
import logging
import argparse
from datetime import datetime

from src.db.database import create_tables
from src.network.errors import NetworkError

# Create logs directory
logs_dir = os.path.join(os.getcwd(), 'logs')
os.makedirs(logs_dir, exist_ok=True)

# Create log file with today's date
log_filename = os.path.join(logs_dir, f'travel_search_{datetime.now().strftime("%Y%m%d")}.log')

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_filename),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Search flights, hotels and car rentals")
    commands = parser.add_subparsers(dest="command", required=True)

    locations = commands.add_parser("locations", help="Autocomplete airports and cities")
    locations.add_argument("query")

    flights = commands.add_parser("flights", help="Start a flight search and print the first results")
    flights.add_argument("origin")
    flights.add_argument("destination")
    flights.add_argument("departure_date", help="YYYY-MM-DD")
    flights.add_argument("--return-date", help="YYYY-MM-DD, makes the search a round trip")
    flights.add_argument("--adults", type=int, default=1)
    flights.add_argument("--cabin-class", default="economy")

    serve = commands.add_parser("serve", help="Run the local HTTP facade")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def run_locations(args):
    from src.clients.location import LocationClient

    response = LocationClient().search_locations(args.query)
    for location in response.data:
        print(f"  {location.iata_code}  {location.display_name} ({location.country_name})")
    return 0


def run_flights(args):
    from src.models.profile import currency_info_for
    from src.network.constants import api_parameters
    from src.network.reachability import NetworkMonitor
    from src.utils.dates import parse_api_date
    from src.viewmodels.flight_search import FlightSearchViewModel
    from src.viewmodels.results import ResultViewModel

    monitor = NetworkMonitor()
    monitor.check()
    search = FlightSearchViewModel(network_monitor=monitor)
    search.update_search_parameters(
        origin=args.origin.upper(),
        destination=args.destination.upper(),
        departure_date=parse_api_date(args.departure_date),
        return_date=parse_api_date(args.return_date) if args.return_date else None,
        is_round_trip=bool(args.return_date),
        adults=args.adults,
        cabin_class=args.cabin_class,
    )
    search_id = search.search_flights().result()
    if search_id is None:
        print(search.error_message)
        return 1

    results = ResultViewModel(currency=currency_info_for(api_parameters().currency))
    results.poll_flights(search_id).result()
    if results.error_message:
        print(results.error_message)
        return 1

    print(f"\nFound {results.total_results_count} flights")
    for flight in results.flight_results[:10]:
        legs = " | ".join(
            f"{leg.origin_code} {leg.formatted_departure_time} -> {leg.destination_code} "
            f"{leg.formatted_arrival_time} ({leg.stops_text})"
            for leg in flight.legs
        )
        print(f"  {results.format_price(flight)}  {flight.formatted_duration}  {legs}")
    return 0


def run_server(args):
    import uvicorn

    uvicorn.run("src.api.app:app", host=args.host, port=args.port)
    return 0


def main(argv=None):
    """
    Main function to run a search from the command line.
    """
    args = build_parser().parse_args(argv)
    try:
        # Initialize database tables
        create_tables()

        if args.command == "locations":
            return run_locations(args)
        if args.command == "flights":
            return run_flights(args)
        return run_server(args)
    except NetworkError as e:
        logger.error(f"Request failed: {e.message}")
        return 1
    except Exception as e:
        logger.error(f"An error occurred in the main function: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    logger.info(f"Exiting with code {exit_code}")
    sys.exit(exit_code)
