"""Command-line interface for the flight inventory and crew scheduler."""

import argparse
import logging
import json
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from api.service import SOLVERS, AirlineService
from data.generators.sample_network import generate_sample_network, print_instance_summary
from data.generators.domestic_network import generate_domestic_network
from models import format_minutes
from models.exceptions import NoRouteFound

INSTANCES = {
    "sample_network": generate_sample_network,
    "domestic_network": generate_domestic_network,
}


def setup_logging(level: str = "INFO", log_file: str = None) -> None:
    """Configure logging."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers
    )


def print_route(service: AirlineService, source: str, destination: str, metric: str) -> dict:
    """Print the fastest or cheapest route and return it as a dict."""
    try:
        if metric == "time":
            result = service.shortest_by_time(source, destination)
            print(f"Shortest route ({result.total_weight} mins): {result}")
        else:
            result = service.shortest_by_price(source, destination)
            print(f"Cheapest route ({result.total_weight:.2f} INR): {result}")
    except NoRouteFound as e:
        print(e.message)
        return {"metric": metric, "error": e.error_code}
    return result.to_dict()


def print_duties(service: AirlineService) -> None:
    """Print every crew member's duty list."""
    print("\n----- Crew Duties -----")
    for member in service.list_crew():
        print(f"Crew ID: {member.id} | Role: {member.role.value}")
        duties = service.duties(member.id)
        if not duties:
            print("  No flights assigned.")
        for duty in duties:
            print(
                f"  Flight ID: {duty.flight_id} | "
                f"Departure: {format_minutes(duty.departure)} | "
                f"Arrival: {format_minutes(duty.arrival)}"
            )
        print("-" * 25)


def run_instance(
    instance: str = "sample_network",
    route: list = None,
    metric: str = "time",
    assign_crew: bool = False,
    solver: str = "greedy",
    vacancy: bool = False,
    duties: bool = False,
    verbose: bool = True,
    output_file: str = None
) -> AirlineService:
    """Load an instance and run the requested actions against it."""
    logger = logging.getLogger(__name__)

    # Generate instance
    logger.info(f"Generating {instance} instance...")
    service = INSTANCES[instance]()

    if verbose:
        print_instance_summary(service, title=instance.replace("_", " ").upper())

    summary = {"instance": instance}

    if route:
        source, destination = route
        summary["route"] = print_route(service, source, destination, metric)

    if vacancy:
        report = service.crew_vacancy()
        print(f"Add {report.extra_pilots} more pilots")
        print(f"Add {report.extra_attendants} more attendants")
        summary["vacancy"] = report.to_dict()

    if assign_crew:
        logger.info(f"Assigning crew with the {solver} solver...")
        report = service.assign_crew(solver)
        report.print_summary()
        summary["assignment"] = report.to_dict()

    if duties:
        print_duties(service)

    # Save summary if requested
    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(summary, f, indent=2)
        logger.info(f"Summary saved to {output_file}")

    return service


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="FlightEase flight inventory, routing and crew scheduling"
    )

    parser.add_argument(
        "--instance",
        type=str,
        default="sample_network",
        choices=sorted(INSTANCES),
        help="Instance to load (default: sample_network)"
    )

    parser.add_argument(
        "--route",
        nargs=2,
        metavar=("SRC", "DST"),
        default=None,
        help="Find a route between two airport codes"
    )

    parser.add_argument(
        "--metric",
        type=str,
        default="time",
        choices=["time", "price"],
        help="Route metric (default: time)"
    )

    parser.add_argument(
        "--assign-crew",
        action="store_true",
        help="Assign crew to every flight"
    )

    parser.add_argument(
        "--solver",
        type=str,
        default="greedy",
        choices=list(SOLVERS),
        help="Crew assignment solver (default: greedy)"
    )

    parser.add_argument(
        "--vacancy",
        action="store_true",
        help="Report how many more pilots and attendants are needed"
    )

    parser.add_argument(
        "--duties",
        action="store_true",
        help="List every crew member's duties"
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file for summary JSON"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress the instance summary"
    )

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.log_level, args.log_file)

    run_instance(
        instance=args.instance,
        route=args.route,
        metric=args.metric,
        assign_crew=args.assign_crew,
        solver=args.solver,
        vacancy=args.vacancy,
        duties=args.duties,
        verbose=not args.quiet,
        output_file=args.output
    )


if __name__ == "__main__":
    main()
