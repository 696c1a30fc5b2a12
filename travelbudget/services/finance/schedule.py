# services/finance/schedule.py
import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, List, Optional

from travelbudget.core.logger import logger
from travelbudget.schemas.trip.trip_schema import DEFAULT_CURRENCY, Payment, Trip, TripLike, as_trip
from travelbudget.schemas.finance.finance_schema import (
    AlertType, PaymentAlert, ScheduledPayment, MonthlyBucket, MonthlySchedule,
)
from travelbudget.services.finance.status import Moment, days_between
from travelbudget.utils.parsing import as_instant

URGENT_WINDOW_DAYS = 7


def next_payment_due(trip: TripLike) -> Optional[Payment]:
    """Earliest-due unpaid monthly payment; equal due dates keep list order."""
    trip = as_trip(trip)
    candidates = [
        payment for payment in trip.monthly_payments
        if not payment.paid and payment.due_date is not None
    ]
    if not candidates:
        return None
    # sorted() is stable, so ties resolve to list order
    return sorted(candidates, key=lambda payment: payment.due_date)[0]


def unpaid_scheduled_payments(trip: TripLike) -> Iterator[ScheduledPayment]:
    """
    Every unpaid payment of a trip that has both a due date and an amount.

    The deposit only counts when its amount is positive, matching how the
    payment form treats an empty deposit field.
    """
    trip = as_trip(trip)
    currency = trip.currency or DEFAULT_CURRENCY

    if (
        trip.deposit is not None and trip.deposit > 0
        and trip.deposit_due_date is not None
        and not trip.deposit_paid
    ):
        yield ScheduledPayment(
            trip_id=trip.id,
            trip_name=trip.name,
            amount=trip.deposit,
            description="Deposit",
            kind="deposit",
            due_date=trip.deposit_due_date,
            currency=currency,
        )

    for kind, entries in (("monthly", trip.monthly_payments), ("payment", trip.payments)):
        for payment in entries:
            if payment.paid or payment.due_date is None or payment.amount is None:
                continue
            yield ScheduledPayment(
                trip_id=trip.id,
                trip_name=trip.name,
                amount=payment.amount,
                description=payment.description or "Payment",
                kind=kind,
                due_date=payment.due_date,
                currency=currency,
            )


def end_of_month(moment: Moment) -> datetime:
    """Midnight at the start of the last day of the month containing `moment`."""
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    return datetime.combine(date(moment.year, moment.month, last_day), time.min)


def upcoming_payment_alerts(
    trips: Iterable[TripLike],
    now: Moment,
    window_days: int = URGENT_WINDOW_DAYS,
) -> List[PaymentAlert]:
    """
    Alerts for unpaid payments falling due soon.

    Due within `window_days` of `now` is urgent; otherwise due before the end
    of the current calendar month is upcoming. Past-due and later payments
    are left out. The result is ordered by due date.
    """
    instant = as_instant(now)
    urgent_until = instant + timedelta(days=window_days)
    month_end = end_of_month(instant)

    alerts: List[PaymentAlert] = []
    for trip in trips:
        for item in unpaid_scheduled_payments(trip):
            due = as_instant(item.due_date)
            if due < instant:
                continue
            if due <= urgent_until:
                alert_type = AlertType.urgent
            elif due <= month_end:
                alert_type = AlertType.upcoming
            else:
                continue
            alerts.append(
                PaymentAlert(
                    type=alert_type,
                    trip_id=item.trip_id,
                    trip_name=item.trip_name,
                    amount=item.amount,
                    due_date=item.due_date,
                    description=item.description,
                    currency=item.currency,
                    days_until=days_between(item.due_date, instant),
                )
            )

    alerts.sort(key=lambda alert: alert.due_date)
    logger.debug(f"Built {len(alerts)} payment alerts")
    return alerts


def month_label(day: date) -> str:
    return f"{calendar.month_name[day.month]} {day.year}"


def monthly_payment_schedule(trips: Iterable[TripLike]) -> MonthlySchedule:
    """Unpaid dated payments grouped by "Month YYYY", in calendar order."""
    buckets: MonthlySchedule = {}
    for trip in trips:
        for item in unpaid_scheduled_payments(trip):
            label = month_label(item.due_date)
            bucket = buckets.get(label)
            if bucket is None:
                bucket = buckets[label] = MonthlyBucket(first_due_date=item.due_date)
            bucket.total += item.amount
            bucket.payments.append(item)
            if item.due_date < bucket.first_due_date:
                bucket.first_due_date = item.due_date

    ordered = sorted(buckets.items(), key=lambda entry: entry[1].first_due_date)
    return dict(ordered)


def payments_due_on(trips: Iterable[TripLike], day: date) -> List[ScheduledPayment]:
    return [
        item
        for trip in trips
        for item in unpaid_scheduled_payments(trip)
        if item.due_date == day
    ]


def trips_on_date(trips: Iterable[TripLike], day: date) -> List[Trip]:
    """Trips whose start..end range covers `day`; both dates are required."""
    covering = []
    for trip in trips:
        trip = as_trip(trip)
        if trip.start_date is None or trip.end_date is None:
            continue
        if trip.start_date <= day <= trip.end_date:
            covering.append(trip)
    return covering
