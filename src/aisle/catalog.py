"""Built-in category catalog and store-type defaults.

The catalog is static configuration: an immutable table handed explicitly to the
seeding routine (``aisle.db.categories.seed_default_categories``) rather than
global mutable state. Keywords cover English and Romanian product names.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from aisle.models.category import normalize_keywords
from aisle.models.store import StoreType


class CategorySeed(BaseModel):
    """Catalog entry used to create a Category on first run."""

    name: str
    keywords: tuple[str, ...]
    default_unit: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("keywords", mode="before")
    @classmethod
    def _lowercase_keywords(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return tuple(normalize_keywords(value))
        return value


def _seed(name: str, default_unit: str, keywords: str) -> CategorySeed:
    return CategorySeed(
        name=name,
        default_unit=default_unit,
        keywords=keywords.split(","),
    )


DEFAULT_CATEGORIES: tuple[CategorySeed, ...] = (
    _seed(
        "Dairy",
        "kg",
        "milk,cheese,butter,yogurt,cream,sour cream,cottage cheese,mozzarella,cheddar,"
        "parmesan,feta,gouda,brie,ricotta,whipping cream,condensed milk,evaporated milk,"
        "buttermilk,custard,kefir,cream cheese,mascarpone,goat cheese,lactose-free milk,"
        "almond milk,soy milk,oat milk,lapte,branza,unt,iaurt,smantana,smantana acra,"
        "branza de vaci,parmezan,smantana pentru frisca,lapte condensat,lapte evaporat,"
        "lapte fara lactoza,lapte de migdale,lapte de soia,lapte de ovaz",
    ),
    _seed(
        "Produce",
        "kg",
        "apple,banana,tomato,lettuce,carrot,onion,potato,cucumber,pepper,spinach,orange,"
        "strawberry,grapes,pear,peach,plum,cherry,blueberry,raspberry,melon,watermelon,"
        "pineapple,mango,kiwi,lemon,lime,garlic,ginger,avocado,broccoli,cauliflower,"
        "zucchini,eggplant,cabbage,kale,beet,radish,spring onion,shallot,herbs,basil,"
        "parsley,cilantro,mint,mar,rosie,salata,morcov,ceapa,cartof,castravete,ardei,"
        "spanac,portocala,capsuna,struguri,para,piersica,pruna,cirese,afine,zmeura,pepene,"
        "pepene verde,ananas,lamaie,usturoi,ghimbir,brocoli,conopida,dovlecel,vinete,"
        "varza,sfecla,ridiche,ceapa verde,sicalot,ierburi,busuioc,patrunjel,menta",
    ),
    _seed(
        "Meat",
        "kg",
        "chicken,beef,pork,lamb,turkey,sausage,bacon,ham,steak,ground beef,mince,chorizo,"
        "salami,prosciutto,veal,duck,goose,organ meats,liver,kidney,meatballs,ribs,brisket,"
        "poultry,rotisserie chicken,pui,vita,porc,miel,curcan,carnati,sunca,friptura,"
        "carne tocata,carnati chorizo,salam,vita tanara,rata,gaste,organe,ficat,rinichi,"
        "chiftelute,coaste,pastrama,pasare,pui rotisat",
    ),
    _seed(
        "Beverages",
        "L",
        "water,juice,soda,coffee,tea,beer,wine,coke,sprite,lemonade,sparkling water,"
        "mineral water,energy drink,sports drink,iced tea,cold brew,espresso,latte,"
        "milkshake,smoothie,kombucha,coconut water,flavored water,apa,suc,"
        "bautura carbogazoasa,cafea,ceai,bere,vin,coca-cola,limonada,apa minerala,"
        "apa carbogazoasa,bautura energizanta,bautura pentru sportivi,ceai rece,"
        "apa de cocos,apa aromata",
    ),
    _seed(
        "Bakery",
        "pcs",
        "bread,bagel,croissant,muffin,cake,pastry,baguette,rolls,donuts,buns,sourdough,"
        "ciabatta,pretzel,brownie,scone,tart,pie,pita,flatbread,focaccia,naan,brioche,"
        "paine,covrigi,briose,tort,patiserie,bagheta,chifle,gogosi,covrig",
    ),
    _seed(
        "Frozen",
        "pcs",
        "ice cream,frozen pizza,frozen vegetables,frozen fruits,popsicle,frozen meal,"
        "frozen fish,frozen chips,frozen berries,ice,frozen desserts,frozen dinners,"
        "frozen pastry,inghetata,pizza congelata,legume congelate,fructe congelate,"
        "inghetata pe bat,mezeluri congelate,peste congelat,cartofi congelati,"
        "fructe de padure congelate,gheata,deserturi congelate,cinele congelate,"
        "aluat congelat",
    ),
    _seed(
        "Pantry",
        "kg",
        "pasta,rice,flour,sugar,salt,pepper,oil,vinegar,cereal,beans,canned,tomato paste,"
        "tomato sauce,broth,stock,spices,herbs,lentils,quinoa,breadcrumbs,soy sauce,"
        "mustard,ketchup,mayonnaise,peanut butter,jam,honey,syrup,coconut milk,chickpeas,"
        "tuna,sardines,paste,orez,faina,zahar,sare,piper,ulei,otet,cereale,fasole,"
        "conserva,pasta de tomate,sos de tomate,supa concentrata,condimente,"
        "ierburi uscate,linte,pesmet,sos de soia,mustar,maioneza,unt de arahide,"
        "dulceata,miere,sirop,lapte de cocos,naut,ton,sardine",
    ),
    _seed(
        "Snacks",
        "pcs",
        "chips,crackers,cookies,chocolate,candy,popcorn,nuts,pretzels,granola bar,"
        "protein bar,trail mix,jerky,rice cakes,fruit snacks,seaweed snacks,biscuiti,"
        "fursecuri,ciocolata,dulciuri,nuci,covrigei,batoane granola,batoane proteice,"
        "mix de fructe uscate,tortilla",
    ),
    _seed(
        "Personal Care",
        "pcs",
        "shampoo,soap,toothpaste,deodorant,lotion,tissue,toilet paper,conditioner,"
        "body wash,razor,shaving cream,mouthwash,cotton buds,cotton pads,face wash,"
        "sunscreen,hand sanitizer,face cream,sampon,sapun,pasta de dinti,servetele,"
        "hartie igienica,balsam,gel de dus,spuma de ras,ata dentara,betisoare de urechi,"
        "dischete demachiante,crema de fata,crema de maini",
    ),
    _seed(
        "Cleaning",
        "pcs",
        "detergent,bleach,cleaner,sponge,trash bags,dish soap,fabric softener,"
        "laundry detergent,all-purpose cleaner,glass cleaner,floor cleaner,disinfectant,"
        "dishwasher tablets,scrub brush,mop,broom,inalbitor,solutie de curatat,burete,"
        "saci de gunoi,detergent de vase,balsam rufe,detergent rufe,solutie universala,"
        "solutie pentru geamuri,solutie pentru pardoseli,dezinfectant,"
        "pastile masina de spalat vase,perie de sters,matura",
    ),
    _seed(
        "Medicine",
        "pcs",
        "aspirin,ibuprofen,cough syrup,antibiotic,allergy,painkiller,prescription,"
        "cold medicine,vitamin c,thermometer,antacid,ointment,eye drops,nasal spray,"
        "aspirina,sirop de tuse,alergii,analgezic,reteta,medicament pentru raceala,"
        "vitamina c,termometru,antiacide,unguent,picaturi pentru ochi,spray nazal",
    ),
    _seed(
        "Vitamins",
        "pcs",
        "vitamin,supplement,multivitamin,calcium,omega,probiotic,vitamin d,"
        "iron supplement,zinc,fish oil,collagen,biotin,vitamine,supliment,multivitamine,"
        "calciu,omega 3,vitamina d,supliment de fier,ulei de peste,colagen,biotina",
    ),
    _seed(
        "First Aid",
        "pcs",
        "bandage,gauze,band-aid,antiseptic,first aid,plaster,sterile pad,adhesive tape,"
        "antibiotic ointment,tweezers,safety pins,bandaj,tampon steril,plasture,"
        "trusa prim ajutor,pansament steril,penseta,ace de siguranta",
    ),
    _seed(
        "Beauty",
        "pcs",
        "makeup,lipstick,mascara,foundation,perfume,nail polish,skincare,serum,face mask,"
        "cleanser,toner,body lotion,hair oil,hair spray,curling iron,machiaj,ruj,rimel,"
        "fond de ten,parfum,lac de unghii,ingrijire ten,masca pentru fata,demachiant,"
        "ulei de par,spray pentru par,ondulator",
    ),
    _seed(
        "Tools",
        "pcs",
        "hammer,screwdriver,drill,saw,wrench,pliers,tape measure,level,chisel,socket set,"
        "utility knife,allen key,sandpaper,nail gun,ciocan,surubelnita,bormasina,"
        "ferastrau,cheie,clesti,ruleta,nivela,dalta,trusa de tubulare,cutit utilitar,"
        "cheie imbus,hartie abraziva,pistol de cuie",
    ),
    _seed(
        "Hardware",
        "pcs",
        "screw,nail,bolt,nut,anchor,hinge,lock,washer,bracket,shelf pin,chain,hook,"
        "eye bolt,surub,cui,buloan,piulita,ancora,balama,yala,saiba,suport,"
        "stift pentru raft,lant,carlig,buloan cu ochi",
    ),
    _seed(
        "Paint",
        "L",
        "paint,primer,brush,roller,spray paint,stain,varnish,paint thinner,paint tray,"
        "latex paint,oil paint,emulsion,vopsea,grund,pensula,role,vopsea spray,lac,"
        "diluant,tava pentru vopsea,vopsea latex,vopsea pe baza de ulei",
    ),
    _seed(
        "Electrical",
        "pcs",
        "wire,cable,outlet,switch,bulb,led,extension cord,battery,fuse,circuit breaker,"
        "plug,adapter,charger,socket,sarma,cablu,priza,intrerupator,bec,prelungitor,"
        "baterie,siguranta,tablou electric,adaptor,incarcator",
    ),
    _seed(
        "Plumbing",
        "pcs",
        "pipe,faucet,valve,fitting,drain,plunger,sealant,washer,hose,pipe cutter,solder,"
        "PVC pipe,elbow fitting,teava,baterie lavoar,robinet,racord,scurgere,sifon,"
        "desfundator,etansant,garnitura,furtun,taietor de tevi,cositor,teava PVC,cot",
    ),
    _seed(
        "Garden",
        "pcs",
        "soil,fertilizer,seeds,pot,hose,rake,shovel,gloves,pruner,lawn seed,mulch,"
        "plant food,weed killer,garden trowel,watering can,pamant,ingrasamant,seminte,"
        "ghiveci,furtun,grebla,lopata,manusi,foarfeca de gradina,samanta pentru gazon,"
        "mulci,ingrasamant pentru plante,iarbicide,cazma de gradina,stropitoare",
    ),
)

STORE_TYPE_DEFAULT_CATEGORIES: Mapping[StoreType, tuple[str, ...]] = MappingProxyType(
    {
        "grocery": (
            "Produce",
            "Dairy",
            "Meat",
            "Bakery",
            "Beverages",
            "Frozen",
            "Pantry",
            "Snacks",
        ),
        "pharmacy": ("Personal Care", "Medicine", "Vitamins", "First Aid", "Beauty"),
        "hardware": ("Tools", "Hardware", "Paint", "Electrical", "Plumbing", "Garden"),
        "convenience": ("Beverages", "Snacks", "Dairy", "Bakery", "Personal Care"),
    }
)


def default_category_names(store_type: StoreType) -> tuple[str, ...]:
    """Category names a new store of ``store_type`` starts with, in aisle order."""

    return STORE_TYPE_DEFAULT_CATEGORIES.get(store_type, ())


__all__ = [
    "CategorySeed",
    "DEFAULT_CATEGORIES",
    "STORE_TYPE_DEFAULT_CATEGORIES",
    "default_category_names",
]
